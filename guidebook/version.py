# -*- coding: utf-8 -*-
"""Application version detection.

``get_app_version()`` prefers the installed distribution metadata and falls
back to ``vdev`` for source checkouts.
"""

from __future__ import annotations

from importlib import metadata
from typing import Optional

_CACHED_VERSION: Optional[str] = None
_DISTRIBUTION = "guidebook-viewer"


def get_app_version() -> str:
    """Return the application version string (e.g., ``v1.2.3``)."""
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION

    try:
        text = metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        text = ""
    text = text.strip()
    _CACHED_VERSION = (text if text.startswith("v") else f"v{text}") if text else "vdev"
    return _CACHED_VERSION
