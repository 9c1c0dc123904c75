from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Mapping, Optional

from guidebook.core.document import ContentContainer, PlainTextRenderer, RenderResult
from guidebook.core.exceptions import GuidebookError
from guidebook.core.localization import Localizer
from guidebook.core.models import GuideEntry, GuideTree, TreeNode
from guidebook.core.roots import sorted_root_entries
from guidebook.core.tree_builder import build_tree

logger = logging.getLogger(__name__)

__all__ = ["GuidebookController", "RENDER_ERROR_TEXT"]

RENDER_ERROR_TEXT = "ERROR: Failed to parse document."


class GuidebookController:
    """Controller deciding what the guidebook shows and how it reacts.

    The controller owns the entry store and the built tree for the current
    update and drives a host view through a small duck-typed surface. It
    contains no Tk code, so the same logic runs against the real window and
    against test fakes.

    Parameters
    ----------
    view : object
        Host view exposing ``set_tree``, ``set_selected_index``,
        ``expand_parents``, ``set_tree_visible``, ``set_split_resizable``,
        ``set_placeholder_visible``, ``set_content_visible``,
        ``set_filter_visible``, ``set_filter_text``, ``get_filter_text``,
        ``reset_scroll`` and a ``content`` container.
    renderer : object
        Rendering collaborator with ``try_add_markup(container, text)``.
    resources : object
        Resource collaborator with a context-managed ``open_text(reference)``.
    localizer : Callable[[str], str]
        Resolves entry name keys to display strings.

    Notes
    -----
    - Nothing here raises for malformed entry graphs, unknown ids or
      unrenderable documents; each degrades to a visible UI state.
    - The view must not echo ``set_selected_index`` back as a selection
      event; user-driven selection arrives through :meth:`on_selection_changed`.
    """

    def __init__(
        self,
        view: object,
        renderer: Optional[object] = None,
        resources: Optional[object] = None,
        localizer: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.view = view
        self.renderer = renderer if renderer is not None else PlainTextRenderer()
        self.resources = resources
        self.localize: Callable[[str], str] = localizer if localizer is not None else Localizer()

        self._entries: Dict[str, GuideEntry] = {}
        self._tree: GuideTree = GuideTree()
        self._selected: Optional[TreeNode] = None
        self._displayed: Optional[GuideEntry] = None

    # ---------------------------------------------------------------------------------
    # Read-only state
    # ---------------------------------------------------------------------------------

    @property
    def entries(self) -> Dict[str, GuideEntry]:
        return self._entries

    @property
    def tree(self) -> GuideTree:
        return self._tree

    @property
    def selected_node(self) -> Optional[TreeNode]:
        return self._selected

    @property
    def selected_entry(self) -> Optional[GuideEntry]:
        return self._selected.entry if self._selected is not None else None

    @property
    def displayed_entry(self) -> Optional[GuideEntry]:
        """Entry whose content is on screen; differs from the selection after a direct link."""
        return self._displayed

    # ---------------------------------------------------------------------------------
    # Public operations
    # ---------------------------------------------------------------------------------

    def update_guides(
        self,
        entries: Mapping[str, GuideEntry],
        root_ids: Optional[Iterable[str]] = None,
        forced_root: Optional[str] = None,
        selected: Optional[str] = None,
    ) -> None:
        """Replace the entry store, rebuild the tree and resolve the selection."""
        self._entries = dict(entries)
        self._repopulate_tree(root_ids, forced_root)
        self.clear_selected_guide()

        if len(self._entries) == 1:
            self.view.set_tree_visible(False)
            self.view.set_split_resizable(False)
            selected = next(iter(self._entries))
        else:
            self.view.set_tree_visible(True)
            self.view.set_split_resizable(True)

        if selected is not None:
            node = self._tree.find(selected)
            if node is None:
                logger.debug("Requested guide %s is not part of the tree", selected)
        else:
            node = self._tree.first()
        self.select_index(node.index if node is not None else None)

    def select_index(self, index: Optional[int]) -> None:
        """Select the node at ``index`` (or clear the selection with ``None``)."""
        node = self._tree.node_at(index) if index is not None else None
        self._selected = node
        self.view.set_selected_index(node.index if node is not None else None)
        if node is not None:
            self.show_guide(node.entry)
        else:
            self.clear_selected_guide()

    def on_selection_changed(self, index: Optional[int]) -> None:
        """Tree widget callback for user-driven selection changes."""
        self.select_index(index)

    def handle_link(self, target_id: str) -> None:
        """Navigate to the entry referenced by an in-content link."""
        entry = self._entries.get(target_id)
        if entry is None:
            logger.debug("Ignoring link to unknown guide %s", target_id)
            return

        node = self._tree.find(target_id)
        if node is not None:
            self._tree.expand_parents(node)
            self.view.expand_parents(node.index)
            self.select_index(node.index)
        else:
            self.show_guide(entry)

    def on_filter_text_changed(self, text: str) -> None:
        """Apply the filter text to the searchable elements of the shown guide."""
        entry = self.selected_entry
        if entry is None or not entry.filter_enabled:
            return

        term = (text or "").strip()
        elements = self.view.content.searchable_elements()
        for element in elements:
            element.set_hidden_state(True, term)
        logger.debug("Filter '%s' applied to %d element(s) of %s", term, len(elements), entry.id)

    def clear_selected_guide(self) -> None:
        """Show the placeholder and drop any rendered content."""
        self._displayed = None
        self.view.set_placeholder_visible(True)
        self.view.set_content_visible(False)
        self.view.set_filter_visible(False)
        self.view.content.clear()

    def show_guide(self, entry: GuideEntry) -> RenderResult:
        """Render ``entry`` into the content area."""
        view = self.view
        content: ContentContainer = view.content

        view.reset_scroll()
        view.set_placeholder_visible(False)
        view.set_content_visible(True)
        view.set_filter_text("")
        content.clear()
        self._displayed = entry

        view.set_filter_visible(entry.filter_enabled)

        result = self._render(entry, content)
        if not result.success:
            content.add_error(RENDER_ERROR_TEXT)
            logger.error("Failed to parse contents of guide document %s. %s", entry.id, result.message)
        return result

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    def _repopulate_tree(self, root_ids: Optional[Iterable[str]], forced_root: Optional[str]) -> None:
        roots = sorted_root_entries(self._entries, root_ids, self.localize)
        self._tree = build_tree(self._entries, roots, forced_root, self.localize)
        self._selected = None
        self.view.set_tree(self._tree)

    def _render(self, entry: GuideEntry, content: ContentContainer) -> RenderResult:
        if self.resources is None:
            return RenderResult(False, "No content resources configured.", {"reason": "no_resources"})
        try:
            with self.resources.open_text(entry.text) as fh:
                text = fh.read()
        except (GuidebookError, OSError, UnicodeError) as exc:
            return RenderResult(False, str(exc), {"reason": type(exc).__name__})

        result = self.renderer.try_add_markup(content, text)
        if isinstance(result, bool):
            result = RenderResult(result, "ok" if result else "Renderer rejected the document.")
        return result
