"""Configuration files (YAML) and the :class:`ConfigManager` that reads them."""

from .manager import ConfigManager

__all__ = [
    "ConfigManager",
]
