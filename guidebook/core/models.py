from __future__ import annotations

"""Shared data structures for the guidebook core.

Entries are the externally supplied records; nodes and trees are what the
core builds out of them for one update cycle. Nothing here touches Tk or
performs I/O so the objects can be used by the controller, the widgets and
the tests alike.
"""

import weakref
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from guidebook.core.exceptions import PrototypeError

__all__ = ["GuideEntry", "TreeNode", "GuideTree"]


@dataclass(frozen=True)
class GuideEntry:
    """A single addressable unit of guide content.

    Attributes
    ----------
    id
        Unique key within one entry store.
    name
        Localization key of the display name.
    text
        Reference to the document content (resolved by the resource layer).
    children
        Ordered child entry ids. May name entries that are not loaded.
    priority
        Ascending sort key among sibling roots.
    filter_enabled
        Whether the displayed content supports live text filtering.
    """

    id: str
    name: str
    text: str
    children: Tuple[str, ...] = ()
    priority: int = 0
    filter_enabled: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GuideEntry":
        """Build an entry from a ``guideEntry`` prototype mapping."""
        missing = [key for key in ("id", "name", "text") if not data.get(key)]
        if missing:
            raise PrototypeError(
                "Guide entry prototype is missing required fields",
                entry_id=str(data.get("id") or "") or None,
                validation_errors=[f"missing field '{key}'" for key in missing],
            )
        children = data.get("children") or ()
        if isinstance(children, str):
            children = (children,)
        try:
            priority = int(data.get("priority", 0) or 0)
        except (TypeError, ValueError) as exc:
            raise PrototypeError(
                f"Invalid priority {data.get('priority')!r}",
                entry_id=str(data["id"]),
                cause=exc,
            ) from exc
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            text=str(data["text"]),
            children=tuple(str(child) for child in children),
            priority=priority,
            filter_enabled=bool(data.get("filterEnabled", False)),
        )


@dataclass(eq=False)
class TreeNode:
    """Displayable representation of one entry inside a built tree.

    The node owns its children; the parent link is a weak back reference so
    ownership stays strictly downward.
    """

    entry: GuideEntry
    index: int
    label: str
    children: List["TreeNode"] = field(default_factory=list)
    expanded: bool = False
    _parent_ref: Optional["weakref.ReferenceType[TreeNode]"] = field(default=None, repr=False)

    @property
    def parent(self) -> Optional["TreeNode"]:
        return self._parent_ref() if self._parent_ref is not None else None

    def add_child(self, child: "TreeNode") -> None:
        child._parent_ref = weakref.ref(self)
        self.children.append(child)

    def ancestors(self) -> Iterator["TreeNode"]:
        """Yield parents from the nearest one up to the top level."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent


@dataclass
class GuideTree:
    """Result of one tree build.

    Attributes
    ----------
    roots
        Top-level nodes in display order.
    index
        Reverse index from entry id to its (single) node.
    duplicates
        Entry ids rejected because they were reached a second time, in
        traversal order.
    """

    roots: List[TreeNode] = field(default_factory=list)
    index: Dict[str, TreeNode] = field(default_factory=dict)
    duplicates: List[str] = field(default_factory=list)

    def nodes(self) -> Iterator[TreeNode]:
        """Iterate every node in pre-order."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def first(self) -> Optional[TreeNode]:
        return self.roots[0] if self.roots else None

    def find(self, entry_id: str) -> Optional[TreeNode]:
        return self.index.get(entry_id)

    def node_at(self, index: int) -> Optional[TreeNode]:
        for node in self.nodes():
            if node.index == index:
                return node
        return None

    def set_all_expanded(self, expanded: bool) -> None:
        for node in self.nodes():
            node.expanded = expanded

    def expand_parents(self, node: TreeNode) -> None:
        for parent in node.ancestors():
            parent.expanded = True

    def __len__(self) -> int:
        return len(self.index)
