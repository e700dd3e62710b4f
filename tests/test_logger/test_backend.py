"""
Test Suite for the Logging Rendering Backend.

Tests activity registration, update rendering, id disambiguation and the
log verbs of LogRenderer.
"""

import io
import logging

import pytest

from buildline.core.errors import StructuredError
from buildline.core.logger import LogRenderer, LogStyle


# ACTIVITIES: REGISTRATION
@pytest.mark.unit
def test_create_activity_registers_live_handle(renderer):
    """Test create_activity() keeps the handle among live activities."""
    handle = renderer.create_activity(type="spinner", id="compile", status="")

    assert handle.id == "compile"
    assert handle.type == "spinner"
    assert renderer.activities == {"compile": handle}


@pytest.mark.unit
def test_duplicate_live_ids_are_suffixed(renderer):
    """Test concurrent activities with the same name get distinct ids."""
    first = renderer.create_activity(type="progress", id="images", current=0, total=3)
    second = renderer.create_activity(type="progress", id="images", current=0, total=3)
    third = renderer.create_activity(type="progress", id="images", current=0, total=3)

    assert [first.id, second.id, third.id] == ["images", "images-2", "images-3"]


@pytest.mark.unit
def test_done_releases_id(renderer):
    """Test a finished activity frees its id for reuse."""
    handle = renderer.create_activity(type="spinner", id="bundle")
    handle.done()

    again = renderer.create_activity(type="spinner", id="bundle")

    assert again.id == "bundle"
    assert "bundle" in renderer.activities


# ACTIVITIES: RENDERING
@pytest.mark.unit
def test_spinner_start_and_done_lines(renderer, stream):
    """Test a spinner prints a start line and a ✓ completion line."""
    handle = renderer.create_activity(type="spinner", id="compile")

    handle.update({"start_time": 0.0})
    handle.update({"status": "12 files"})
    handle.done()

    lines = stream.getvalue().splitlines()
    assert lines[0] == f"{LogStyle.SPINNER} compile"
    assert lines[1].endswith("compile: 12 files")
    assert lines[2].startswith(f"{LogStyle.SUCCESS} compile - ")
    assert lines[2].endswith("- 12 files")


@pytest.mark.unit
def test_progress_renders_each_tenth_once(renderer, stream):
    """Test progress lines appear at INFO only when another tenth is crossed."""
    handle = renderer.create_activity(type="progress", id="pages", current=0, total=20)

    for current in range(1, 5):
        handle.update({"current": current})

    info_lines = [line for line in stream.getvalue().splitlines() if "pages" in line]
    # 1/20 -> bucket 0, 2/20 -> bucket 1, 3/20 -> bucket 1, 4/20 -> bucket 2
    assert len(info_lines) == 3
    assert info_lines[-1].strip() == "pages 4/20 (20%)"


@pytest.mark.unit
def test_progress_done_includes_ratio(renderer, stream):
    """Test progress completion line shows current/total."""
    handle = renderer.create_activity(type="progress", id="pages", current=7, total=9)

    handle.done()

    assert f"{LogStyle.SUCCESS} pages 7/9 - " in stream.getvalue()


@pytest.mark.unit
def test_updates_after_done_are_ignored(renderer, stream):
    """Test a finished handle no longer renders."""
    handle = renderer.create_activity(type="spinner", id="late")
    handle.done()
    before = stream.getvalue()

    handle.update({"status": "ignored"})
    handle.done()

    assert stream.getvalue() == before


@pytest.mark.unit
def test_interleaved_activities_keep_own_state(renderer):
    """Test updates to one activity do not leak into another."""
    a = renderer.create_activity(type="progress", id="a", current=0, total=10)
    b = renderer.create_activity(type="progress", id="b", current=5, total=10)

    a.update({"current": 1})
    b.update({"current": 6})
    a.update({"total": 20})

    assert (a.current, a.total) == (1, 20)
    assert (b.current, b.total) == (6, 10)


# LOG VERBS
@pytest.mark.unit
def test_verbose_hidden_until_enabled(renderer, stream):
    """Test verbose lines only appear after set_verbose(True)."""
    renderer.verbose("hidden")
    renderer.set_verbose(True)
    renderer.verbose("shown")

    output = stream.getvalue()
    assert "hidden" not in output
    assert "shown" in output


@pytest.mark.unit
def test_warn_prefixes_symbol(renderer, stream):
    """Test warn() prefixes the warning symbol."""
    renderer.warn("deprecated option")

    assert stream.getvalue().strip() == f"{LogStyle.WARNING} deprecated option"


@pytest.mark.unit
def test_error_summary_line(renderer, stream):
    """Test error() renders level, id and text on one line."""
    renderer.error(StructuredError(id="95313", context={"source_message": "Build failed"}))

    assert stream.getvalue().strip() == f"{LogStyle.FAILURE} error #95313 Build failed"


@pytest.mark.unit
def test_error_warning_level_uses_warning(renderer):
    """Test WARNING structured errors are logged at WARNING level."""
    records = []
    handler = logging.Handler()
    handler.emit = records.append
    renderer._log.addHandler(handler)

    renderer.error(StructuredError(level="WARNING", context={"source_message": "slow query"}))

    assert records[0].levelno == logging.WARNING


@pytest.mark.unit
def test_set_colors_reconfigures_handler(renderer, stream):
    """Test set_colors(True) makes subsequent lines colored."""
    renderer.set_colors(True)
    renderer.success(f"{LogStyle.SUCCESS} done")

    assert LogStyle.GREEN in stream.getvalue()


@pytest.mark.unit
def test_set_stage_is_recorded(renderer):
    """Test set_stage() stores the current stage."""
    renderer.set_stage("bootstrap")

    assert renderer.stage == "bootstrap"


@pytest.mark.unit
def test_set_colors_keeps_log_file(tmp_path):
    """Test toggling colors reuses the open log file instead of starting a new one."""
    renderer = LogRenderer(stream=io.StringIO(), colors=False, log_dir=tmp_path)
    file_handler = next(h for h in renderer._log.handlers if hasattr(h, "maxBytes"))

    renderer.set_colors(True)
    renderer.set_colors(False)

    assert file_handler in renderer._log.handlers
    assert len(list(tmp_path.glob("*.log"))) == 1


@pytest.mark.unit
def test_colors_enabled_reflects_console(renderer):
    """Test colors_enabled follows set_colors()."""
    assert renderer.colors_enabled is False

    renderer.set_colors(True)

    assert renderer.colors_enabled is True


# ISOLATION
@pytest.mark.unit
def test_default_named_renderers_do_not_share_output():
    """Test two renderers created without a name keep separate streams."""
    first_stream, second_stream = io.StringIO(), io.StringIO()
    first = LogRenderer(stream=first_stream, colors=False)
    second = LogRenderer(stream=second_stream, colors=False)

    first.info("from first")
    second.info("from second")

    assert first.name != second.name
    assert first_stream.getvalue() == "from first\n"
    assert second_stream.getvalue() == "from second\n"


@pytest.mark.unit
def test_base_level_restored_after_verbose():
    """Test leaving verbose mode returns to the configured level."""
    renderer = LogRenderer(stream=io.StringIO(), colors=False, level="WARNING")
    assert renderer._log.level == logging.WARNING

    renderer.set_verbose(True)
    renderer.set_verbose(False)

    assert renderer._log.level == logging.WARNING
