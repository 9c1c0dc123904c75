from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

logger = logging.getLogger(__name__)

__all__ = ["FilterBar"]


class FilterBar(ttk.Frame):
    """Search entry used to filter the displayed guide content.

    Parameters
    ----------
    master : tk.Widget
        Parent Tkinter widget.
    on_text_changed : Optional[Callable[[str], None]], optional
        Callback invoked when the text changes, programmatically or by
        typing. Identical consecutive values are reported once.
    placeholder : str, optional
        Label shown to the left of the entry.

    Notes
    -----
    - Escape and the clear button (×) empty the entry and always report the
      empty text, even when it was already empty.
    - Callback exceptions are logged and never reach the Tkinter mainloop.
    """

    def __init__(
        self,
        master: "tk.Widget",
        *,
        on_text_changed: Optional[Callable[[str], None]] = None,
        placeholder: str = "Filter",
    ) -> None:
        super().__init__(master)
        self._on_text_changed = on_text_changed

        self._text_var = tk.StringVar(value="")
        self._last_notified: Optional[str] = None

        # Layout: Label | Entry | Clear
        self.columnconfigure(1, weight=1)
        self._label = ttk.Label(self, text=placeholder)
        self._label.grid(row=0, column=0, padx=(0, 4), sticky="w")

        self._entry = ttk.Entry(self, textvariable=self._text_var)
        self._entry.grid(row=0, column=1, padx=(0, 4), sticky="ew")

        self._clear_btn = ttk.Button(self, text="×", width=2, command=self._on_clear_clicked)
        self._clear_btn.grid(row=0, column=2, sticky="nsew")

        # Variable trace catches programmatic and user edits
        self._text_var.trace_add("write", self._on_text_var_changed)
        self._entry.bind("<Escape>", self._on_escape, add="+")

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def set_text(self, text: str) -> None:
        self._text_var.set(text or "")

    def get_text(self) -> str:
        return self._text_var.get()

    def focus_entry(self) -> None:
        self._entry.focus_set()
        self._entry.icursor("end")

    # ---------------------------------------------------------------------
    # Internal helpers and handlers
    # ---------------------------------------------------------------------
    def _maybe_notify(self) -> None:
        if self._on_text_changed is None:
            return
        text = self.get_text()
        if text == self._last_notified:
            return
        self._last_notified = text
        try:
            self._on_text_changed(text)
        except Exception:
            logger.exception("Filter callback failed")

    def _on_text_var_changed(self, *args) -> None:
        self._maybe_notify()

    def _force_clear(self) -> None:
        self.set_text("")
        self._last_notified = None
        self._maybe_notify()

    def _on_escape(self, event: tk.Event) -> str:
        self._force_clear()
        return "break"

    def _on_clear_clicked(self) -> None:
        self._force_clear()
