"""Reusable Tk widgets of the guidebook viewer."""

from .document_view import DocumentView
from .filter_bar import FilterBar
from .guide_tree import GuideTreeWidget

__all__ = [
    "DocumentView",
    "FilterBar",
    "GuideTreeWidget",
]
