from __future__ import annotations

"""Central logging configuration for the guidebook viewer.

Call :func:`setup_logging` once at start-up, before the Tk root is created.

Environment:

- ``GUIDEBOOK_LOG_DIR``: directory of ``guidebook.log`` (default ``logs``).
- ``GUIDEBOOK_DEBUG=1``: DEBUG for the whole ``guidebook`` package.
- ``GUIDEBOOK_DEBUG_MODULES=a.b,c.d``: DEBUG for the listed loggers only.
"""

import copy
import logging
import logging.config
import os
from typing import Any, Dict, List

from guidebook.config import ConfigManager

__all__ = ["setup_logging"]

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_TRUTHY = {'1', 'true', 'yes', 'on'}


def setup_logging() -> None:
    """Configure logging from the ``logging`` config section, or a console fallback."""
    log_dir = os.environ.get("GUIDEBOOK_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "guidebook.log")

    section = ConfigManager().get_logging_config()
    if not section.get("version"):
        _setup_minimal_logging("no logging section")
    else:
        try:
            logging.config.dictConfig(_with_log_file(section, log_file))
            logging.getLogger(__name__).info("===== Logging initialised, writing to %s =====", log_file)
        except (ValueError, TypeError, AttributeError, ImportError) as exc:
            # dictConfig reports bad configurations with these
            _setup_minimal_logging(str(exc))

    _apply_debug_overrides()


def _with_log_file(section: Dict[str, Any], log_file: str) -> Dict[str, Any]:
    config = copy.deepcopy(section)
    for handler in (config.get("handlers") or {}).values():
        if isinstance(handler, dict) and "filename" in handler:
            handler["filename"] = log_file
    return config


def _setup_minimal_logging(reason: str) -> None:
    """Console-only logging for when the configured setup cannot be used."""
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'simple': {'format': _FORMAT}},
        'handlers': {
            'console': {'class': 'logging.StreamHandler', 'formatter': 'simple', 'level': 'INFO'},
        },
        'loggers': {
            'guidebook': {'level': 'INFO', 'handlers': ['console'], 'propagate': False},
        },
        'root': {'level': 'WARNING', 'handlers': ['console']},
    })
    logging.getLogger(__name__).error("===== Logging initialised with console fallback (%s) =====", reason)


def _debug_targets() -> List[str]:
    targets = []
    if os.environ.get('GUIDEBOOK_DEBUG', '').strip().lower() in _TRUTHY:
        targets.append('guidebook')
    modules = os.environ.get('GUIDEBOOK_DEBUG_MODULES', '')
    targets.extend(name.strip() for name in modules.split(',') if name.strip())
    return targets


def _apply_debug_overrides() -> None:
    for name in _debug_targets():
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        if not any(h.level <= logging.DEBUG for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(handler)
        logger.info("Debug override active for logger '%s'", name)
