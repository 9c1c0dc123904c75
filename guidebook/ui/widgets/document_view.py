# -*- coding: utf-8 -*-
"""DocumentView widget.

Read-only text area that displays the elements of a
:class:`~guidebook.core.document.ContentContainer`:

- headings and paragraphs (hidden blocks are left out),
- the current filter term highlighted inside visible blocks,
- link spans that call ``on_link(entry_id)`` when clicked,
- inline error labels.

The widget redraws itself when the container changes; redraws are coalesced
on the Tk idle queue so filtering many blocks costs one redraw.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional

from guidebook.core.document import ContentContainer, ErrorLabel, TextBlock

logger = logging.getLogger(__name__)

__all__ = ["DocumentView"]


class DocumentView(ttk.Frame):
    """Scrollable read-only view over a content container."""

    def __init__(
        self,
        parent: tk.Widget,
        *,
        container: Optional[ContentContainer] = None,
        on_link: Optional[Callable[[str], None]] = None,
        **kwargs,
    ) -> None:
        super().__init__(parent, **kwargs)
        self.container = container if container is not None else ContentContainer()
        self.on_link = on_link

        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self._text = tk.Text(self, wrap="word", relief="flat", padx=8, pady=8, cursor="arrow")
        self._vsb = ttk.Scrollbar(self, orient="vertical", command=self._text.yview)
        self._text.configure(yscrollcommand=self._vsb.set, state="disabled")
        self._text.grid(row=0, column=0, sticky="nsew")
        self._vsb.grid(row=0, column=1, sticky="ns")

        self._text.tag_configure("heading1", font=("", 16, "bold"), spacing1=6, spacing3=6)
        self._text.tag_configure("heading2", font=("", 13, "bold"), spacing1=4, spacing3=4)
        self._text.tag_configure("heading3", font=("", 11, "bold"), spacing1=2, spacing3=2)
        self._text.tag_configure("paragraph", spacing3=8)
        self._text.tag_configure("highlight", background="#FFE082")
        self._text.tag_configure("link", foreground="#0B6BD3", underline=1)
        self._text.tag_configure("error", foreground="#C62828")
        self._text.tag_bind("link", "<Enter>", lambda _e: self._text.configure(cursor="hand2"))
        self._text.tag_bind("link", "<Leave>", lambda _e: self._text.configure(cursor="arrow"))

        # Per-redraw link tag name -> target entry id
        self._link_targets: Dict[str, str] = {}
        self._redraw_pending = False

        self.container.subscribe(self._schedule_redraw)

    # -------------------------------------------------------------- Public API

    def reset_scroll(self) -> None:
        self._text.yview_moveto(0.0)

    def get_text(self) -> str:
        """Return the currently displayed text (used by tests and copy actions)."""
        return self._text.get("1.0", "end-1c")

    def redraw(self) -> None:
        """Rebuild the text from the container immediately."""
        self._redraw_pending = False
        text = self._text
        text.configure(state="normal")
        text.delete("1.0", "end")
        for tag in self._link_targets:
            text.tag_delete(tag)
        self._link_targets.clear()

        for element in self.container.elements:
            if isinstance(element, TextBlock):
                if not element.hidden:
                    self._insert_block(element)
            elif isinstance(element, ErrorLabel):
                text.insert("end", element.text + "\n", ("error",))
        text.configure(state="disabled")

    # ------------------------------------------------------------- Internals

    def _schedule_redraw(self) -> None:
        if self._redraw_pending:
            return
        self._redraw_pending = True
        try:
            self.after_idle(self.redraw)
        except tk.TclError:
            # Widget already destroyed
            self._redraw_pending = False

    def _insert_block(self, block: TextBlock) -> None:
        text = self._text
        start = text.index("end-1c")
        style = f"heading{min(max(block.level, 1), 3)}" if block.kind == "heading" else "paragraph"
        text.insert("end", block.text + "\n", (style,))

        for number, (begin, end, target) in enumerate(block.links):
            tag = f"link-{len(self._link_targets)}-{number}"
            self._link_targets[tag] = target
            text.tag_add("link", f"{start}+{begin}c", f"{start}+{end}c")
            text.tag_add(tag, f"{start}+{begin}c", f"{start}+{end}c")
            text.tag_bind(tag, "<Button-1>", lambda _e, t=target: self._on_link_clicked(t))

        if block.highlight:
            self._highlight(start, block)

    def _highlight(self, start: str, block: TextBlock) -> None:
        needle = block.highlight.casefold()
        haystack = block.text.casefold()
        pos = haystack.find(needle)
        while pos >= 0:
            self._text.tag_add("highlight", f"{start}+{pos}c", f"{start}+{pos + len(needle)}c")
            pos = haystack.find(needle, pos + len(needle))

    def _on_link_clicked(self, target: str) -> None:
        if self.on_link is None:
            return
        try:
            self.on_link(target)
        except Exception:
            logger.exception("Link handler failed for %s", target)
