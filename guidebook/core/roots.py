from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Mapping, Optional, Set

from guidebook.core.models import GuideEntry

logger = logging.getLogger(__name__)

__all__ = ["infer_root_ids", "sorted_root_entries"]


def infer_root_ids(entries: Mapping[str, GuideEntry]) -> List[str]:
    """Return the ids that no entry lists as a child, in store order."""
    referenced: Set[str] = set()
    for entry in entries.values():
        referenced.update(entry.children)
    return [entry_id for entry_id in entries if entry_id not in referenced]


def sorted_root_entries(
    entries: Mapping[str, GuideEntry],
    root_ids: Optional[Iterable[str]] = None,
    localize: Callable[[str], str] = str,
) -> List[GuideEntry]:
    """Resolve the root list and order it by ``(priority, display name)``.

    When ``root_ids`` is omitted the roots are inferred from the child
    references of the whole store. Unknown explicit ids are dropped.
    """
    if root_ids is None:
        root_ids = infer_root_ids(entries)

    resolved: List[GuideEntry] = []
    for entry_id in root_ids:
        entry = entries.get(entry_id)
        if entry is None:
            logger.debug("Skipping unknown root entry: %s", entry_id)
            continue
        resolved.append(entry)

    return sorted(resolved, key=lambda entry: (entry.priority, localize(entry.name)))
