import pytest

from guidebook.core.document import (
    ContentContainer,
    ErrorLabel,
    PlainTextRenderer,
    SearchableElement,
    TextBlock,
)


def test_renderer_splits_paragraphs_and_headings():
    container = ContentContainer()
    result = PlainTextRenderer().try_add_markup(container, "# Title\n\nFirst line\ncontinued.\n\n\nSecond.")

    assert result.success
    assert result.details == {"blocks": 3}
    blocks = container.elements
    assert [(b.kind, b.level, b.text) for b in blocks] == [
        ("heading", 1, "Title"),
        ("paragraph", 0, "First line continued."),
        ("paragraph", 0, "Second."),
    ]


def test_renderer_extracts_link_spans():
    container = ContentContainer()
    PlainTextRenderer().try_add_markup(container, "Read [the power guide](Power) and [more](Glossary).")

    (block,) = container.elements
    assert block.text == "Read the power guide and more."
    spans = [(block.text[s:e], target) for s, e, target in block.links]
    assert spans == [("the power guide", "Power"), ("more", "Glossary")]


@pytest.mark.parametrize("text", ["", "   \n\n  "])
def test_empty_documents_fail(text):
    container = ContentContainer()
    result = PlainTextRenderer().try_add_markup(container, text)
    assert not result.success
    assert result.details["reason"] == "empty"
    assert len(container) == 0


def test_malformed_link_fails_without_partial_content():
    container = ContentContainer()
    result = PlainTextRenderer().try_add_markup(container, "Fine.\n\nBroken [link](has space).")
    assert not result
    assert result.details == {"reason": "malformed_link", "paragraph": 2}
    assert len(container) == 0


def test_text_block_hidden_state_follows_match():
    block = TextBlock("Substation steps voltage down")

    block.set_hidden_state(True, "voltage")
    assert not block.hidden and block.highlight == "voltage"

    block.set_hidden_state(True, "VOLTAGE")
    assert not block.hidden

    block.set_hidden_state(True, "apc")
    assert block.hidden

    # inverted state hides matches instead
    block.set_hidden_state(False, "voltage")
    assert block.hidden

    block.set_hidden_state(True, "")
    assert not block.hidden and block.highlight == ""


def test_container_lists_only_searchable_elements_and_notifies():
    container = ContentContainer()
    changes = []
    container.subscribe(lambda: changes.append(len(container)))

    block = TextBlock("x")
    container.add_element(block)
    error = container.add_error("boom")
    block.set_hidden_state(True, "nope")
    container.clear()

    assert isinstance(block, SearchableElement)
    assert not isinstance(error, SearchableElement)
    assert isinstance(error, ErrorLabel)
    assert changes == [1, 2, 2, 0]
    assert container.searchable_elements() == []
