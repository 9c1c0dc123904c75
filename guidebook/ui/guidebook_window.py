from __future__ import annotations

"""Main guidebook frame: navigation tree on the left, filter bar and content
on the right.

The frame is the host view of :class:`GuidebookController`; it only turns
controller calls into widget state and forwards widget events back.
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Any, Dict, Optional

from guidebook.core.document import ContentContainer
from guidebook.core.models import GuideTree
from guidebook.ui.split_layout import SplitLayoutCoordinator
from guidebook.ui.widgets.document_view import DocumentView
from guidebook.ui.widgets.filter_bar import FilterBar
from guidebook.ui.widgets.guide_tree import GuideTreeWidget

logger = logging.getLogger(__name__)

__all__ = ["GuidebookWindow"]


class GuidebookWindow(ttk.Frame):
    """Tk implementation of the guidebook controller's view surface."""

    def __init__(self, master: tk.Misc, *, settings: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(master)
        settings = settings or {}
        self._controller = None
        self.content = ContentContainer()

        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self._paned = ttk.PanedWindow(self, orient="horizontal")
        self._paned.grid(row=0, column=0, sticky="nsew")

        # Left: navigation tree
        self._tree_box = ttk.Frame(self._paned)
        self._tree_box.columnconfigure(0, weight=1)
        self._tree_box.rowconfigure(0, weight=1)
        self.tree = GuideTreeWidget(self._tree_box, on_selection_changed=self._on_tree_selection)
        self.tree.grid(row=0, column=0, sticky="nsew")

        # Right: filter bar, placeholder and document
        self._right = ttk.Frame(self._paned)
        self._right.columnconfigure(0, weight=1)
        self._right.rowconfigure(1, weight=1)

        self.filter_bar = FilterBar(
            self._right,
            on_text_changed=self._on_filter_text,
            placeholder=str(settings.get("filter_placeholder") or "Filter"),
        )
        self.filter_bar.grid(row=0, column=0, sticky="ew", padx=6, pady=(6, 2))

        self._placeholder = ttk.Label(
            self._right,
            text=str(settings.get("placeholder_text") or "Select a guide entry."),
            anchor="center",
        )
        self._placeholder.grid(row=1, column=0, sticky="nsew")

        self.document = DocumentView(self._right, container=self.content, on_link=self._on_link)
        self.document.grid(row=1, column=0, sticky="nsew")

        self._paned.add(self._tree_box, weight=1)
        self._paned.add(self._right, weight=3)

        self.layout = SplitLayoutCoordinator(paned=self._paned, left_pane=self._tree_box, after=self.after)
        tree_width = settings.get("tree_width")
        if isinstance(tree_width, int):
            self.after(50, lambda: self.layout.set_initial_width(tree_width))

    def bind_controller(self, controller: object) -> None:
        """Attach the controller that receives tree, filter and link events."""
        self._controller = controller

    # ------------------------------------------------------------------
    # View surface used by the controller
    # ------------------------------------------------------------------
    def set_tree(self, tree: GuideTree) -> None:
        self.tree.populate(tree)

    def set_selected_index(self, index: Optional[int]) -> None:
        self.tree.set_selected_index(index)

    def expand_parents(self, index: int) -> None:
        self.tree.expand_parents(index)

    def set_tree_visible(self, visible: bool) -> None:
        self.layout.set_left_visible(visible)

    def set_split_resizable(self, resizable: bool) -> None:
        self.layout.set_resizable(resizable)

    def set_placeholder_visible(self, visible: bool) -> None:
        if visible:
            self._placeholder.grid()
            self._placeholder.lift()
        else:
            self._placeholder.grid_remove()

    def set_content_visible(self, visible: bool) -> None:
        if visible:
            self.document.grid()
            self.document.lift()
        else:
            self.document.grid_remove()

    def set_filter_visible(self, visible: bool) -> None:
        if visible:
            self.filter_bar.grid()
        else:
            self.filter_bar.grid_remove()

    def set_filter_text(self, text: str) -> None:
        self.filter_bar.set_text(text)

    def get_filter_text(self) -> str:
        return self.filter_bar.get_text()

    def reset_scroll(self) -> None:
        self.document.reset_scroll()

    # ------------------------------------------------------------------
    # Widget events
    # ------------------------------------------------------------------
    def _on_tree_selection(self, index: Optional[int]) -> None:
        if self._controller is not None:
            self._controller.on_selection_changed(index)

    def _on_filter_text(self, text: str) -> None:
        if self._controller is not None:
            self._controller.on_filter_text_changed(text)

    def _on_link(self, target: str) -> None:
        if self._controller is not None:
            self._controller.handle_link(target)
