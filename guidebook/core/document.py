from __future__ import annotations

"""Rendered document content.

The content container holds the elements produced for the currently shown
guide. Searchable elements accept a hidden state plus a query and decide
their own visibility, which keeps the filter logic free of any knowledge of
what an element contains.

:class:`PlainTextRenderer` is the default rendering collaborator. It only
knows paragraphs, ``#`` headings and inline ``[label](entry-id)`` links;
richer markup is expected to come from a replacement renderer exposing the
same ``try_add_markup`` method.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable

logger = logging.getLogger(__name__)

__all__ = [
    "SearchableElement",
    "TextBlock",
    "ErrorLabel",
    "ContentContainer",
    "RenderResult",
    "PlainTextRenderer",
]

_LINK_RE = re.compile(r"\[([^\[\]\n]+)\]\(([^()\s]+)\)")
_HEADING_RE = re.compile(r"^(#{1,3})\s+(.*)$")


@runtime_checkable
class SearchableElement(Protocol):
    """Rendered element that takes part in content filtering."""

    def set_hidden_state(self, state: bool, query: str) -> None:
        ...


@dataclass(eq=False)
class TextBlock:
    """A paragraph or heading of rendered text.

    Attributes
    ----------
    text
        Display text with link markers already replaced by their labels.
    kind
        ``"paragraph"`` or ``"heading"``.
    level
        Heading level (0 for paragraphs).
    links
        ``(start, end, target_id)`` spans into ``text``.
    hidden
        Current filter visibility.
    highlight
        Query to highlight; empty means no highlight.
    """

    text: str
    kind: str = "paragraph"
    level: int = 0
    links: List[Tuple[int, int, str]] = field(default_factory=list)
    hidden: bool = False
    highlight: str = ""
    _on_change: Optional[Callable[[], None]] = field(default=None, repr=False)

    def matches(self, query: str) -> bool:
        if not query:
            return True
        return query.casefold() in self.text.casefold()

    def set_hidden_state(self, state: bool, query: str) -> None:
        visible = state if self.matches(query) else not state
        self.hidden = not visible
        self.highlight = query
        if self._on_change is not None:
            self._on_change()


@dataclass(eq=False)
class ErrorLabel:
    """Inline error element shown in place of unrenderable content."""

    text: str


class ContentContainer:
    """In-memory container for the elements of the displayed document.

    Listeners registered through :meth:`subscribe` are called after every
    change (cleared, element added, visibility toggled) so a view can redraw.
    """

    def __init__(self) -> None:
        self._elements: List[Any] = []
        self._listeners: List[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def elements(self) -> List[Any]:
        return list(self._elements)

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def clear(self) -> None:
        self._elements.clear()
        self._notify()

    def add_element(self, element: Any) -> None:
        if isinstance(element, TextBlock):
            element._on_change = self._notify
        self._elements.append(element)
        self._notify()

    def add_error(self, message: str) -> ErrorLabel:
        label = ErrorLabel(message)
        self.add_element(label)
        return label

    def searchable_elements(self) -> List[SearchableElement]:
        return [el for el in self._elements if isinstance(el, SearchableElement)]

    def __len__(self) -> int:
        return len(self._elements)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Content listener failed")


@dataclass
class RenderResult:
    """Structured outcome of a render attempt.

    Attributes
    ----------
    success : bool
        Whether the content was added to the container.
    message : str
        Human-readable outcome message. Clear on failure, brief on success.
    details : Optional[Dict[str, Any]]
        Ancillary data such as the number of blocks or the failure reason.
    """

    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None

    def __bool__(self) -> bool:
        return self.success


class PlainTextRenderer:
    """Default rendering collaborator for plain guide documents."""

    def try_add_markup(self, container: ContentContainer, text: str) -> RenderResult:
        """Parse ``text`` and add its blocks to ``container``.

        Nothing is added unless the whole document parses.
        """
        if not text or not text.strip():
            return RenderResult(False, "Document is empty.", {"reason": "empty"})

        blocks: List[TextBlock] = []
        for number, chunk in enumerate(_split_paragraphs(text), 1):
            block = _parse_block(chunk)
            if block is None:
                return RenderResult(
                    False,
                    f"Malformed link in paragraph {number}.",
                    {"reason": "malformed_link", "paragraph": number},
                )
            blocks.append(block)

        for block in blocks:
            container.add_element(block)
        return RenderResult(True, "ok", {"blocks": len(blocks)})


def _split_paragraphs(text: str) -> List[str]:
    chunks: List[str] = []
    current: List[str] = []
    for line in text.splitlines():
        if line.strip():
            current.append(line.strip())
        elif current:
            chunks.append(" ".join(current))
            current = []
    if current:
        chunks.append(" ".join(current))
    return chunks


def _parse_block(chunk: str) -> Optional[TextBlock]:
    kind, level = "paragraph", 0
    heading = _HEADING_RE.match(chunk)
    if heading:
        kind, level = "heading", len(heading.group(1))
        chunk = heading.group(2)

    parts: List[str] = []
    links: List[Tuple[int, int, str]] = []
    offset = 0
    pos = 0
    for match in _LINK_RE.finditer(chunk):
        before = chunk[pos:match.start()]
        parts.append(before)
        offset += len(before)
        label = match.group(1)
        links.append((offset, offset + len(label), match.group(2)))
        parts.append(label)
        offset += len(label)
        pos = match.end()
    tail = chunk[pos:]
    parts.append(tail)

    plain = "".join(parts)
    # Leftover markers mean a link that did not parse
    if "](" in "".join(p for i, p in enumerate(parts) if i % 2 == 0):
        return None
    return TextBlock(text=plain, kind=kind, level=level, links=links)
