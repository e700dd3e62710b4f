"""
buildline Command-Line Interface.

Provides the ``buildline`` entry point with two commands:

- ``buildline init``: generate a starter reporter config YAML
- ``buildline exec``: run a shell command as a reported activity

Usage:
    buildline init
    buildline exec "compile assets" -- npm run compile
    buildline exec bundle --build --config buildline.yaml -- make bundle
"""

from __future__ import annotations

import os
import subprocess  # nosec B404
from pathlib import Path
from typing import Annotated, Any

import typer

app = typer.Typer(
    name="buildline",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# ── App callback ────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from importlib.metadata import version as pkg_version

        typer.echo(f"buildline {pkg_version('buildline')}")
        raise typer.Exit()


@app.callback()
def main(
    _: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """buildline: status and error reporting for build tools."""
    ...  # pragma: no cover


# ── Commands ────────────────────────────────────────────────────────────────


@app.command()
def init(
    output: Annotated[
        Path,
        typer.Argument(help="Output YAML file path."),
    ] = Path("buildline.yaml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing file."),
    ] = False,
) -> None:
    """Generate a starter config with every reporter setting and its default."""
    from buildline.core import save_config_as_yaml

    if output.exists() and not force:
        typer.echo(f"Error: '{output}' already exists. Use --force to overwrite.", err=True)
        raise typer.Exit(code=1)

    save_config_as_yaml(_build_init_dict(), output, header=_INIT_HEADER.format(filename=output.name))
    typer.echo(f"Config created: {output}")
    typer.echo(f"Use it with:    buildline exec <name> --config {output} -- <command>")


@app.command(name="exec")
def exec_(
    name: Annotated[
        str,
        typer.Argument(help="Activity name shown while the command runs."),
    ],
    command: Annotated[
        list[str],
        typer.Argument(help="Command to run (put it after --)."),
    ],
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Reporter config YAML."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show verbose output."),
    ] = False,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable ANSI colors."),
    ] = False,
    build: Annotated[
        bool,
        typer.Option("--build", help="Treat this as a build: failures exit non-zero."),
    ] = False,
) -> None:
    """Run COMMAND under an activity timer, streaming its output through the reporter."""
    from buildline import BuildlineConfigError, Reporter, ReporterConfig, set_reporter
    from buildline.core.paths import BUILD_COMMAND, EXECUTING_COMMAND_ENV

    try:
        cfg = ReporterConfig.from_yaml(config) if config is not None else ReporterConfig()
        cfg = ReporterConfig.from_env(base=cfg)
    except BuildlineConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    overrides: dict[str, Any] = {}
    if verbose:
        overrides["verbose"] = True
    if no_color:
        overrides["no_color"] = True
    if build:
        overrides["executing_command"] = BUILD_COMMAND
        os.environ[EXECUTING_COMMAND_ENV] = BUILD_COMMAND
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    reporter = Reporter(cfg)
    set_reporter(reporter)

    return_code = _run_command(reporter, name, command)
    if return_code != 0:
        reporter.panic_on_build(f"Command `{' '.join(command)}` exited with status {return_code}")
        raise typer.Exit(code=return_code)


# ── Private helpers ─────────────────────────────────────────────────────────

_INIT_HEADER = """\
# ==============================================================================
# buildline: Reporter Config (generated by `buildline init`)
# ==============================================================================
# Usage:   buildline exec <name> --config {filename} -- <command>
#
# Environment variables override these values:
#   BUILDLINE_VERBOSE, NO_COLOR, BUILDLINE_EXECUTING_COMMAND,
#   BUILDLINE_TELEMETRY_DISABLED, BUILDLINE_TELEMETRY_DIR
# ==============================================================================

"""


def _build_init_dict() -> dict[str, Any]:
    """
    Build the starter config document.

    Returns:
        ``{"reporter": {...}}`` with every field at its default and the
        telemetry directory reduced to a portable ``~`` path.
    """
    from buildline.core import ReporterConfig

    section = ReporterConfig().model_dump(mode="json")
    section["telemetry_dir"] = "~/.buildline/telemetry"
    return {"reporter": section}


def _run_command(reporter: Any, name: str, command: list[str]) -> int:
    """
    Execute *command*, forwarding its combined output line by line.

    Args:
        reporter: Reporter receiving output and activity updates.
        name: Activity name.
        command: argv of the process to spawn.

    Returns:
        The process exit status (127 when the executable was not found).
    """
    activity = reporter.activity_timer(name)
    activity.start()
    activity.set_status(" ".join(command))

    try:
        process = subprocess.Popen(  # nosec B603
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as e:
        activity.end()
        reporter.error(f"Could not start `{command[0]}`:", e)
        return 127

    assert process.stdout is not None  # nosec B101
    with process.stdout:
        for line in process.stdout:
            reporter.log(line.rstrip("\n"))
    return_code = process.wait()

    activity.end()
    if return_code == 0:
        reporter.success(f"{name} finished")
    return return_code
