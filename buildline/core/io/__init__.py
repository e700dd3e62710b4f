"""
Input/Output Utilities Package.

YAML persistence for reporter configuration files.
"""

from .serialization import load_config_from_yaml, save_config_as_yaml

__all__ = [
    "load_config_from_yaml",
    "save_config_as_yaml",
]
