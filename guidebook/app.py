# -*- coding: utf-8 -*-
"""Tk front-end bootstrap for the guidebook viewer.

Exposes :class:`GuidebookApp`, which loads configuration, guide entry
prototypes and the locale table, then wires the controller to the window.
Instantiated by ``run.py``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import tkinter as tk

from guidebook.config import ConfigManager
from guidebook.core.document import PlainTextRenderer
from guidebook.core.localization import Localizer
from guidebook.core.models import GuideEntry
from guidebook.core.prototypes import load_guide_entries
from guidebook.core.resources import ContentResources, resolve_content_root
from guidebook.ui.controllers.guidebook_controller import GuidebookController
from guidebook.ui.guidebook_window import GuidebookWindow
from guidebook.version import get_app_version

logger = logging.getLogger(__name__)

__all__ = ["GuidebookApp"]


class GuidebookApp:
    """Main application object wrapping the guidebook window."""

    def __init__(
        self,
        root: tk.Tk,
        content_root: Optional[str] = None,
        selected: Optional[str] = None,
    ) -> None:
        self.root = root
        self.settings: Dict[str, Any] = dict(ConfigManager().get_guidebook_config())
        self.content_root = resolve_content_root(content_root or self.settings.get("content_root"))
        logger.info("Guidebook %s starting with content root %s", get_app_version(), self.content_root)

        self.localizer = self._load_localizer()
        self.entries: Dict[str, GuideEntry] = self._load_entries()

        self.window = GuidebookWindow(root, settings={**self.settings, **(self.settings.get("window") or {})})
        self.window.pack(fill="both", expand=True)

        self.controller = GuidebookController(
            self.window,
            renderer=PlainTextRenderer(),
            resources=ContentResources(self.content_root),
            localizer=self.localizer,
        )
        self.window.bind_controller(self.controller)
        self.controller.update_guides(self.entries, selected=selected)

    # ------------------------------------------------------------------
    def _load_localizer(self) -> Localizer:
        locale = self.settings.get("locale")
        if not locale:
            return Localizer()
        return Localizer.from_yaml(self.content_root / str(locale))

    def _load_entries(self) -> Dict[str, GuideEntry]:
        configured: List[str] = list(self.settings.get("prototypes") or [])
        paths = [self.content_root / p for p in configured] or [self.content_root]
        return load_guide_entries(paths)
