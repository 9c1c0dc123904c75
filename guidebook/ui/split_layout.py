from __future__ import annotations

import tkinter as tk
from typing import Callable


class SplitLayoutCoordinator:
    """Manage the navigation pane of the guidebook split and its sash.

    Parameters
    ----------
    paned : object
        ttk.PanedWindow-like object with panes(), insert(), forget(), sashpos().
    left_pane : object
        Frame holding the navigation tree.
    after : Callable[[int, Callable[[], None]], object]
        Tk-like scheduler to defer sash operations (widget.after).
    """

    def __init__(self, *, paned: object, left_pane: object, after: Callable[[int, Callable[[], None]], object]) -> None:
        self._paned = paned
        self._left = left_pane
        self._after = after
        self._ratio: float = 0.27
        self._resizable: bool = True
        self._left_visible: bool = True

        # Instance bindings run before the class bindings that drag the sash
        self._paned.bind("<Button-1>", self._on_sash_press, add="+")
        self._paned.bind("<B1-Motion>", self._on_sash_drag, add="+")
        self._paned.bind("<ButtonRelease-1>", self._on_sash_release, add="+")

    # -------------------------------------------------------------- Public API
    def set_left_visible(self, visible: bool) -> None:
        """Show or hide the navigation pane; the content pane takes the full width when hidden."""
        paned = self._paned
        present = str(self._left) in [str(p) for p in paned.panes()]
        if visible and not present:
            paned.insert(0, self._left, weight=1)
            self._after(0, self.restore_sash)
        elif not visible and present:
            self.capture_ratio()
            paned.forget(self._left)
        self._left_visible = visible

    def set_resizable(self, resizable: bool) -> None:
        self._resizable = resizable

    def set_initial_width(self, width: int) -> None:
        """Remember a pixel width for the navigation pane as the starting ratio."""
        total = self._paned.winfo_width()
        if total > 1 and width > 0:
            self._ratio = max(0.05, min(0.95, width / total))
        self._after(0, self.restore_sash)

    def capture_ratio(self) -> None:
        """Capture the current sash position as the ratio to restore."""
        paned = self._paned
        width = paned.winfo_width()
        if width <= 1 or len(paned.panes()) < 2:
            return
        pos = paned.sashpos(0)
        self._ratio = max(0.05, min(0.95, pos / max(1, width)))

    def restore_sash(self) -> None:
        """Restore sash position with geometry-aware timing."""
        paned = self._paned
        paned.update_idletasks()
        # If width not ready, schedule single retry after geometry settling
        if paned.winfo_width() <= 1:
            self._after(100, self._restore_sash_final)
            return
        self._restore_sash_final()

    def _restore_sash_final(self) -> None:
        paned = self._paned
        width = paned.winfo_width()
        if width <= 1 or len(paned.panes()) < 2:
            return
        ratio = self._ratio if 0.05 < self._ratio < 0.95 else 0.27
        paned.sashpos(0, int(width * ratio))

    # ------------------------------------------------------------- Internals
    def _on_sash_press(self, _event: tk.Event):
        if not self._resizable:
            return "break"
        return None

    def _on_sash_drag(self, _event: tk.Event):
        if not self._resizable:
            return "break"
        return None

    def _on_sash_release(self, _event: tk.Event):
        if not self._resizable:
            return "break"
        self.capture_ratio()
        return None

    # --------------- Accessors ----------
    @property
    def resizable(self) -> bool:
        return self._resizable

    @property
    def left_visible(self) -> bool:
        return self._left_visible

    @property
    def ratio(self) -> float:
        return self._ratio
