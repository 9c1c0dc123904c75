from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

__all__ = ["Localizer"]


class Localizer:
    """Resolve display-name keys to strings.

    Lookup is total: a key without a translation is returned unchanged so a
    missing string shows up as its key instead of failing.
    """

    def __init__(self, strings: Optional[Mapping[str, str]] = None) -> None:
        self._strings: Dict[str, str] = {str(k): str(v) for k, v in (strings or {}).items()}

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Localizer":
        """Load a flat ``key: text`` table; a missing or bad file yields an empty table."""
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except FileNotFoundError:
            logger.warning("Locale table not found: %s", path)
            return cls()
        except (OSError, yaml.YAMLError) as exc:
            logger.error("Could not read locale table %s: %s", path, exc)
            return cls()

        if not isinstance(data, dict):
            logger.error("Locale table %s is not a mapping", path)
            return cls()
        logger.info("Loaded %d localized strings from %s", len(data), path)
        return cls(data)

    def get_string(self, key: str) -> str:
        return self._strings.get(key, key)

    __call__ = get_string

    def __len__(self) -> int:
        return len(self._strings)
