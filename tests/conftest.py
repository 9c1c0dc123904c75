"""Shared fixtures and fakes for the guidebook tests.

The fakes mirror the duck-typed collaborators of the controller: a view that
records every state change, an in-memory resource reader, and a renderer
that can be told to fail.
"""

import io
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from guidebook.config import ConfigManager
from guidebook.core.document import ContentContainer, PlainTextRenderer, RenderResult
from guidebook.core.exceptions import ResourceNotFoundError
from guidebook.core.models import GuideEntry

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def make_entry(entry_id, children=(), priority=0, name=None, filter_enabled=False, text=None):
    return GuideEntry(
        id=entry_id,
        name=name or entry_id,
        text=text or f"/Guidebook/{entry_id}.txt",
        children=tuple(children),
        priority=priority,
        filter_enabled=filter_enabled,
    )


def make_store(*entries):
    return {entry.id: entry for entry in entries}


class FakeView:
    """Records the view state the controller drives."""

    def __init__(self):
        self.content = ContentContainer()
        self.tree = None
        self.selected_index: Optional[int] = None
        self.selection_calls: List[Optional[int]] = []
        self.expanded_parents: List[int] = []
        self.tree_visible = None
        self.split_resizable = None
        self.placeholder_visible = None
        self.content_visible = None
        self.filter_visible = None
        self.filter_text = ""
        self.filter_text_calls: List[str] = []
        self.scroll_resets = 0

    def set_tree(self, tree):
        self.tree = tree

    def set_selected_index(self, index):
        self.selected_index = index
        self.selection_calls.append(index)

    def expand_parents(self, index):
        self.expanded_parents.append(index)

    def set_tree_visible(self, visible):
        self.tree_visible = visible

    def set_split_resizable(self, resizable):
        self.split_resizable = resizable

    def set_placeholder_visible(self, visible):
        self.placeholder_visible = visible

    def set_content_visible(self, visible):
        self.content_visible = visible

    def set_filter_visible(self, visible):
        self.filter_visible = visible

    def set_filter_text(self, text):
        self.filter_text = text
        self.filter_text_calls.append(text)

    def get_filter_text(self):
        return self.filter_text

    def reset_scroll(self):
        self.scroll_resets += 1

    def visible_texts(self):
        return [el.text for el in self.content.searchable_elements() if not el.hidden]


class FakeResources:
    """In-memory resource reader tracking open and closed streams."""

    def __init__(self, documents: Optional[Dict[str, str]] = None):
        self.documents = dict(documents or {})
        self.opened: List[str] = []
        self.closed: List[str] = []

    @contextmanager
    def open_text(self, reference):
        if reference not in self.documents:
            raise ResourceNotFoundError(reference)
        self.opened.append(reference)
        stream = io.StringIO(self.documents[reference])
        try:
            yield stream
        finally:
            stream.close()
            self.closed.append(reference)


class FailingRenderer:
    """Renderer that rejects every document."""

    def __init__(self):
        self.calls = 0

    def try_add_markup(self, container, text):
        self.calls += 1
        return RenderResult(False, "rejected", {"reason": "test"})


@pytest.fixture
def fake_view():
    return FakeView()


@pytest.fixture
def renderer():
    return PlainTextRenderer()


@pytest.fixture
def guide_documents():
    """Documents for the entries built by ``sample_entries``."""
    return {
        "/Guidebook/A.txt": "# A\n\nAlpha apples.\n\nSee [b](B).",
        "/Guidebook/B.txt": "Bravo bananas.\n\nBlue berries.",
        "/Guidebook/C.txt": "Charlie cherries.\n\nCrisp carrots.\n\nCool cucumbers.",
        "/Guidebook/X.txt": "Xray xylophone.",
    }


@pytest.fixture
def resources(guide_documents):
    return FakeResources(guide_documents)


@pytest.fixture
def sample_entries():
    """A -> (B, C) with C filterable, plus a standalone X."""
    return make_store(
        make_entry("A", children=["B", "C"]),
        make_entry("B"),
        make_entry("C", filter_enabled=True),
        make_entry("X"),
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the shared ConfigManager between tests."""
    yield
    ConfigManager.reset()
