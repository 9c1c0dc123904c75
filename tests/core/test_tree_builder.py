import gc
import logging

from guidebook.core.localization import Localizer
from guidebook.core.roots import sorted_root_entries
from guidebook.core.tree_builder import build_tree

from conftest import make_entry, make_store


def _shape(nodes):
    return [(n.entry.id, _shape(n.children)) for n in nodes]


def _build(entries, root_ids=None, forced_root=None, localize=str):
    roots = sorted_root_entries(entries, root_ids, localize)
    return build_tree(entries, roots, forced_root, localize)


def test_simple_hierarchy_is_built_in_declared_order():
    entries = make_store(
        make_entry("A", children=["B", "C"]),
        make_entry("B"),
        make_entry("C"),
    )
    tree = _build(entries)

    assert _shape(tree.roots) == [("A", [("B", []), ("C", [])])]
    assert set(tree.index) == {"A", "B", "C"}
    assert tree.duplicates == []


def test_cycle_with_explicit_root_terminates_and_reports_duplicate(caplog):
    entries = make_store(
        make_entry("A", children=["B"]),
        make_entry("B", children=["A"]),
    )
    with caplog.at_level(logging.ERROR, logger="guidebook.core.tree_builder"):
        tree = _build(entries, root_ids=["A"])

    assert _shape(tree.roots) == [("A", [("B", [])])]
    assert tree.duplicates == ["A"]
    assert "Adding duplicate guide entry: A" in caplog.text


def test_self_reference_is_rejected():
    entries = make_store(make_entry("A", children=["A"]))
    tree = _build(entries, root_ids=["A"])
    assert _shape(tree.roots) == [("A", [])]
    assert tree.duplicates == ["A"]


def test_shared_child_is_attached_at_first_preorder_position():
    entries = make_store(
        make_entry("P1", priority=0, children=["Shared"]),
        make_entry("P2", priority=1, children=["Shared", "Own"]),
        make_entry("Shared", children=["Leaf"]),
        make_entry("Own"),
        make_entry("Leaf"),
    )
    tree = _build(entries)

    assert _shape(tree.roots) == [
        ("P1", [("Shared", [("Leaf", [])])]),
        ("P2", [("Own", [])]),
    ]
    assert tree.duplicates == ["Shared"]
    assert tree.find("Shared").parent is tree.find("P1")


def test_dangling_children_are_silently_dropped(caplog):
    entries = make_store(make_entry("A", children=["Ghost", "B"]), make_entry("B"))
    with caplog.at_level(logging.ERROR):
        tree = _build(entries)
    assert _shape(tree.roots) == [("A", [("B", [])])]
    assert tree.duplicates == []
    assert "Ghost" not in caplog.text


def test_forced_root_becomes_sole_top_level_node():
    entries = make_store(
        make_entry("Top", children=[]),
        make_entry("A", priority=1),
        make_entry("B", priority=0),
    )
    tree = _build(entries, root_ids=["A", "B"], forced_root="Top")
    assert _shape(tree.roots) == [("Top", [("B", []), ("A", [])])]


def test_forced_root_inferred_as_root_is_reported_once():
    entries = make_store(make_entry("Top"), make_entry("A"))
    tree = _build(entries, forced_root="Top")
    assert _shape(tree.roots) == [("Top", [("A", [])])]
    assert tree.duplicates == ["Top"]


def test_unknown_forced_root_falls_back_to_top_level_roots():
    entries = make_store(make_entry("A"), make_entry("B"))
    tree = _build(entries, forced_root="Nope")
    assert [n.entry.id for n in tree.roots] == ["A", "B"]


def test_indices_follow_preorder_and_everything_is_expanded():
    entries = make_store(
        make_entry("A", children=["B", "D"]),
        make_entry("B", children=["C"]),
        make_entry("C"),
        make_entry("D"),
    )
    tree = _build(entries)

    nodes = list(tree.nodes())
    assert [n.entry.id for n in nodes] == ["A", "B", "C", "D"]
    assert [n.index for n in nodes] == [0, 1, 2, 3]
    assert all(n.expanded for n in nodes)
    assert tree.first().entry.id == "A"
    assert tree.node_at(2).entry.id == "C"
    assert tree.node_at(99) is None
    assert len(tree) == 4


def test_labels_are_localized():
    entries = make_store(make_entry("A", name="guide-a"))
    tree = _build(entries, localize=Localizer({"guide-a": "Alpha"}))
    assert tree.find("A").label == "Alpha"


def test_parent_links_do_not_keep_parents_alive():
    entries = make_store(make_entry("A", children=["B"]), make_entry("B"))
    tree = _build(entries)
    child = tree.find("B")
    assert [p.entry.id for p in child.ancestors()] == ["A"]

    del tree
    gc.collect()
    assert child.parent is None


def test_expand_parents_opens_every_ancestor():
    entries = make_store(
        make_entry("A", children=["B"]),
        make_entry("B", children=["C"]),
        make_entry("C"),
    )
    tree = _build(entries)
    tree.set_all_expanded(False)
    tree.expand_parents(tree.find("C"))
    assert tree.find("A").expanded and tree.find("B").expanded
    assert not tree.find("C").expanded
