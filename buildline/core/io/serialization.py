"""
Reporter Configuration Persistence.

Reads and writes the YAML files that hold reporter settings. Writes go to a
temporary sibling first and are moved into place, so a crashed ``init``
never leaves a half-written config behind.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ..paths import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def save_config_as_yaml(data: Any, yaml_path: Path, header: str = "") -> Path:
    """
    Serialize a config model (or plain dict) to YAML.

    Args:
        data: Pydantic model exposing ``model_dump`` or a plain mapping.
        yaml_path: Destination file.
        header: Comment block written before the YAML body.

    Returns:
        The path that was written.

    Raises:
        ValueError: If the data cannot be represented as YAML.
        OSError: If the file cannot be written.
    """
    raw = data.model_dump(mode="json") if hasattr(data, "model_dump") else data

    try:
        body = yaml.safe_dump(
            _sanitize_for_yaml(raw),
            default_flow_style=False,
            sort_keys=False,
            indent=4,
            allow_unicode=True,
        )
    except yaml.YAMLError as e:
        raise ValueError(f"Could not serialize configuration object: {e}") from e

    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = yaml_path.with_name(f".{yaml_path.name}.tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(header + body)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp_path, yaml_path)

    logger.debug(f"Configuration written to {yaml_path}")
    return yaml_path


def load_config_from_yaml(yaml_path: Path) -> dict[str, Any]:
    """
    Load a raw configuration dictionary from a YAML file.

    Args:
        yaml_path: Path to the source YAML file.

    Returns:
        Parsed mapping (empty when the file holds no document).

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If the document is not valid YAML or not a mapping.
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"YAML configuration file not found at: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {yaml_path}, got {type(data).__name__}")
    return data


def _sanitize_for_yaml(obj: Any) -> Any:
    """Recursively convert Path objects and tuples into YAML-standard types."""
    if isinstance(obj, dict):
        return {k: _sanitize_for_yaml(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_sanitize_for_yaml(i) for i in obj]
    if isinstance(obj, Path):
        return str(obj)
    return obj
