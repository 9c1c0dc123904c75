"""GUI-agnostic core of the guidebook viewer.

Entry records, root inference, tree construction and the default content
collaborators live here; nothing in this package imports Tk.
"""

from .models import GuideEntry, GuideTree, TreeNode
from .roots import infer_root_ids, sorted_root_entries
from .tree_builder import build_tree

__all__ = [
    "GuideEntry",
    "GuideTree",
    "TreeNode",
    "infer_root_ids",
    "sorted_root_entries",
    "build_tree",
]
