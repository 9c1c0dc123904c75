from __future__ import annotations

"""Expansion of a root list into a displayable guide tree.

The whole build shares one ``added`` set, so an entry reachable from two
parents is attached only where pre-order traversal meets it first. The same
guard is what makes cycles terminate.
"""

import logging
from typing import Callable, Iterable, Mapping, Optional, Set

from guidebook.core.models import GuideEntry, GuideTree, TreeNode

logger = logging.getLogger(__name__)

__all__ = ["build_tree"]


def build_tree(
    entries: Mapping[str, GuideEntry],
    root_entries: Iterable[GuideEntry],
    forced_root: Optional[str] = None,
    localize: Callable[[str], str] = str,
) -> GuideTree:
    """Build a fully expanded tree from ``root_entries``.

    Parameters
    ----------
    entries : Mapping[str, GuideEntry]
        The entry store of the current update.
    root_entries : Iterable[GuideEntry]
        Already sorted root entries.
    forced_root : Optional[str]
        Entry id that becomes the sole top-level node; the roots are then
        attached below it.
    localize : Callable[[str], str]
        Resolves an entry name key to its display text.

    Returns
    -------
    GuideTree
        The tree, its id index and the list of rejected duplicates.
    """
    tree = GuideTree()
    added: Set[str] = set()

    parent = None
    if forced_root is not None:
        parent = _add_entry(tree, entries, forced_root, None, added, localize)

    for entry in root_entries:
        _add_entry(tree, entries, entry.id, parent, added, localize)

    tree.set_all_expanded(True)
    if tree.duplicates:
        logger.debug("Tree built with %d duplicate reference(s) rejected", len(tree.duplicates))
    return tree


def _add_entry(
    tree: GuideTree,
    entries: Mapping[str, GuideEntry],
    entry_id: str,
    parent: Optional[TreeNode],
    added: Set[str],
    localize: Callable[[str], str],
) -> Optional[TreeNode]:
    entry = entries.get(entry_id)
    if entry is None:
        return None

    if entry_id in added:
        logger.error("Adding duplicate guide entry: %s", entry_id)
        tree.duplicates.append(entry_id)
        return None
    added.add(entry_id)

    node = TreeNode(entry=entry, index=len(tree.index), label=localize(entry.name))
    tree.index[entry_id] = node
    if parent is None:
        tree.roots.append(node)
    else:
        parent.add_child(node)

    for child_id in entry.children:
        _add_entry(tree, entries, child_id, node, added, localize)

    return node
