from __future__ import annotations

"""Configuration loading and access helpers.

Two YAML files ship with *guidebook*: ``guidebook.yml`` (viewer settings)
and ``logging.yml`` (a :func:`logging.config.dictConfig` dictionary). Each
is merged with a same-named user file; nested mappings such as ``window``
are merged key by key, so an override only needs the keys it changes.

User files live in ``$GUIDEBOOK_CONFIG_DIR`` when set, otherwise in
``%LOCALAPPDATA%\\Guidebook\\config`` on Windows and ``~/.guidebook`` elsewhere.
They are seeded from the packaged copies on first start.

Without PyYAML every section is empty and callers use their own defaults.
"""

import importlib.resources as pkg_resources
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager"]

_WINDOW_INT_KEYS = ("width", "height", "tree_width")


def _get_user_config_dir() -> Path:
    override = os.environ.get("GUIDEBOOK_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    if os.name == 'nt':
        base = os.environ.get('LOCALAPPDATA') or str(Path.home() / "AppData" / "Local")
        return Path(base) / "Guidebook" / "config"
    return Path.home() / ".guidebook"


def _read_packaged(filename: str) -> str:
    return pkg_resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")


def _seed_user_dir(user_config_dir: Path, filenames: Mapping[str, str]) -> None:
    """Write the packaged defaults for every user file that does not exist yet."""
    try:
        user_config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Could not create user config directory %s: %s", user_config_dir, e)
        return

    for filename in filenames.values():
        target = user_config_dir / filename
        if target.exists():
            continue
        try:
            target.write_text(_read_packaged(filename), encoding='utf-8')
            logger.info("Created user config: %s", target)
        except OSError as e:
            logger.warning("Could not copy default config %s: %s", filename, e)


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(dict(merged[key]), value)
        else:
            merged[key] = value
    return merged


def _normalise_guidebook(section: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce the viewer settings into the shapes the application expects."""
    prototypes = section.get("prototypes")
    if isinstance(prototypes, str):
        section["prototypes"] = [prototypes]
    elif prototypes is None:
        section["prototypes"] = []

    window = dict(section.get("window") or {})
    for key in _WINDOW_INT_KEYS:
        if key not in window:
            continue
        try:
            window[key] = int(window[key])
        except (TypeError, ValueError):
            logger.warning("Ignoring non-integer window.%s: %r", key, window[key])
            del window[key]
    section["window"] = window
    return section


class _Singleton(type):
    _instance: Optional["ConfigManager"] = None

    def __call__(cls, *args, **kwargs):  # type: ignore[no-self-use]
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Loads the configuration sections once and exposes them as dictionaries."""

    _SECTION_FILES = {
        "guidebook": "guidebook.yml",
        "logging": "logging.yml",
    }

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}
        self._load()

    @classmethod
    def reset(cls) -> None:
        """Forget the shared instance; the next ``ConfigManager()`` reloads from disk."""
        cls._instance = None

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------
    def get_guidebook_config(self) -> Dict[str, Any]:
        return self._data.get("guidebook", {})

    def get_logging_config(self) -> Dict[str, Any]:
        return self._data.get("logging", {})

    def get_window_config(self) -> Dict[str, Any]:
        return dict(self.get_guidebook_config().get("window") or {})

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _load(self) -> None:
        try:
            import yaml  # type: ignore
        except ModuleNotFoundError:
            logger.warning("PyYAML not installed – configuration sections are empty")
            self._data = {key: {} for key in self._SECTION_FILES}
            return

        user_config_dir = _get_user_config_dir()
        _seed_user_dir(user_config_dir, self._SECTION_FILES)

        summary = []
        for key, filename in self._SECTION_FILES.items():
            section, status = self._load_section(yaml, filename, user_config_dir / filename)
            if key == "guidebook":
                section = _normalise_guidebook(section)
            self._data[key] = section
            summary.append(f"{key}: {status}")

        logger.info("Config startup (%s): %s", user_config_dir, " | ".join(summary))

    @staticmethod
    def _load_section(yaml: Any, filename: str, user_path: Path) -> Tuple[Dict[str, Any], str]:
        section: Dict[str, Any] = {}
        try:
            section = dict(yaml.safe_load(_read_packaged(filename)) or {})
            status = "loaded"
        except OSError:
            logger.error("Missing packaged config %s", filename)
            status = "missing"
        except yaml.YAMLError as exc:
            logger.error("Invalid packaged config %s: %s", filename, exc)
            status = "invalid"

        if not user_path.exists():
            return section, status
        try:
            overrides = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.error("Could not parse user config %s: %s", user_path, exc)
            return section, status
        if not isinstance(overrides, Mapping):
            logger.error("User config %s is not a mapping; ignored", user_path)
            return section, status

        section = _deep_merge(section, overrides)
        return section, f"{status}+overrides" if status == "loaded" else status
