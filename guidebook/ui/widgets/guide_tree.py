from __future__ import annotations

import logging
import tkinter as tk
from tkinter import font as tkfont
from tkinter import ttk
from typing import Callable, Dict, List, Optional

from guidebook.core.models import GuideTree, TreeNode

logger = logging.getLogger(__name__)

__all__ = ["GuideTreeWidget"]


class GuideTreeWidget(ttk.Frame):
    """Tkinter widget presenting a built :class:`GuideTree` in a Treeview.

    The widget is presentation only: it mirrors the nodes of the tree it is
    given, keeps Treeview item ids and node indices in sync, and reports
    user selection. It never decides what belongs in the tree.

    Callbacks:
        - on_selection_changed: Invoked when the user selects an item. Receives
          the node index, or None when the selection was emptied.

    Notes
    -----
    - Programmatic selection through :meth:`set_selected_index` does not
      call ``on_selection_changed``; Tk delivers ``<<TreeviewSelect>>``
      asynchronously, so the echo is dropped by comparing against the last
      index set here.
    - The tree is rebuilt on each call to :meth:`populate`.
    """

    def __init__(
        self,
        master: "tk.Widget",
        *,
        on_selection_changed: Optional[Callable[[Optional[int]], None]] = None,
    ) -> None:
        super().__init__(master)
        self._on_selection_changed = on_selection_changed

        try:
            style = ttk.Style(self)
            style_name = "Guidebook.Treeview"
            style.map(
                style_name,
                foreground=[('selected', '#0B6BD3'), ('!focus selected', '#0B6BD3')],
            )
        except tk.TclError:
            style_name = "Treeview"

        self._tree = ttk.Treeview(self, show="tree", selectmode="browse", style=style_name, height=12)
        self._vsb = ttk.Scrollbar(self, orient="vertical", command=self._tree.yview)
        self._tree.configure(yscrollcommand=self._vsb.set)

        self._tree.grid(row=0, column=0, sticky="nsew")
        self._vsb.grid(row=0, column=1, sticky="ns")

        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        # Treeview item id <-> node index
        self._id_to_index: Dict[str, int] = {}
        self._index_to_id: Dict[int, str] = {}
        # Index last selected programmatically or reported to the callback
        self._current_index: Optional[int] = None

        # Top-level entries in bold, like section headings
        try:
            base_font = tkfont.nametofont("TkDefaultFont")
            self._font_root = tkfont.Font(self, font=base_font)
            self._font_root.configure(weight="bold")
            self._tree.tag_configure("root-entry", font=self._font_root)
        except tk.TclError:
            self._tree.tag_configure("root-entry", font=("", 10, "bold"))

        self._tree.bind("<<TreeviewSelect>>", self._on_select_event, add="+")

    # Public API

    def populate(self, tree: GuideTree) -> None:
        """Rebuild the Treeview from ``tree``, honouring each node's expanded flag."""
        self.clear()
        for node in tree.roots:
            self._insert_node("", node, tags=("root-entry",))

    def clear(self) -> None:
        """Remove all items and reset the id mappings."""
        self._tree.delete(*self._tree.get_children(""))
        self._id_to_index.clear()
        self._index_to_id.clear()
        self._current_index = None

    def set_selected_index(self, index: Optional[int]) -> None:
        """Select the item for ``index`` (None clears) without notifying the callback."""
        self._current_index = index
        item_id = self._index_to_id.get(index) if index is not None else None
        if item_id is None:
            self._tree.selection_set(())
            return
        self._tree.selection_set((item_id,))
        self._tree.focus(item_id)
        self._tree.see(item_id)

    def get_selected_index(self) -> Optional[int]:
        selection = self._tree.selection()
        if not selection:
            return None
        return self._id_to_index.get(selection[0])

    def expand_parents(self, index: int) -> None:
        """Open every ancestor of the item for ``index`` so it is visible."""
        item_id = self._index_to_id.get(index)
        if item_id is None:
            return
        parent = self._tree.parent(item_id)
        while parent:
            self._tree.item(parent, open=True)
            parent = self._tree.parent(parent)

    def expand_all(self) -> None:
        for item_id in self._iter_all_item_ids():
            self._tree.item(item_id, open=True)

    def find_item_by_index(self, index: int) -> Optional[str]:
        return self._index_to_id.get(index)

    def item_text(self, index: int) -> str:
        item_id = self._index_to_id.get(index)
        return str(self._tree.item(item_id, "text")) if item_id else ""

    def is_open(self, index: int) -> bool:
        item_id = self._index_to_id.get(index)
        return bool(item_id) and bool(self._tree.item(item_id, "open"))

    # Internal helpers (UI/presentation only)

    def _insert_node(self, parent_id: str, node: TreeNode, tags: tuple = ()) -> str:
        # Tree labels are single-line and whitespace-normalized
        text = " ".join((node.label or node.entry.id).split())
        item_id = self._tree.insert(parent_id, "end", text=text, open=node.expanded, tags=tags)
        self._id_to_index[item_id] = node.index
        self._index_to_id[node.index] = item_id
        for child in node.children:
            self._insert_node(item_id, child)
        return item_id

    def _iter_all_item_ids(self) -> List[str]:
        result: List[str] = []

        def walk(parent: str) -> None:
            for cid in self._tree.get_children(parent):
                result.append(cid)
                walk(cid)

        walk("")
        return result

    def _on_select_event(self, _event: tk.Event) -> None:
        index = self.get_selected_index()
        if index == self._current_index:
            return
        self._current_index = index
        if self._on_selection_changed is None:
            return
        try:
            self._on_selection_changed(index)
        except Exception:
            # Keep the Tk mainloop alive
            logger.exception("Guide selection callback failed")
