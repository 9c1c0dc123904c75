import logging
import textwrap

import pytest

from guidebook.core.resources import SAMPLE_CONTENT_ROOT
from guidebook.core.exceptions import PrototypeError
from guidebook.core.models import GuideEntry
from guidebook.core.prototypes import load_guide_entries


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


def test_loads_guide_entries_and_ignores_other_types(tmp_path):
    _write(tmp_path / "guides.yml", """
        - type: guideEntry
          id: Engineering
          name: guide-entry-engineering
          text: /Guidebook/Engineering.txt
          children: [Power]
          priority: 2
          filterEnabled: true
        - type: entity
          id: Crowbar
        - type: guideEntry
          id: Power
          name: guide-entry-power
          text: /Guidebook/Power.txt
        """)

    entries = load_guide_entries([tmp_path])

    assert list(entries) == ["Engineering", "Power"]
    eng = entries["Engineering"]
    assert eng == GuideEntry(
        id="Engineering",
        name="guide-entry-engineering",
        text="/Guidebook/Engineering.txt",
        children=("Power",),
        priority=2,
        filter_enabled=True,
    )
    assert entries["Power"].children == ()
    assert entries["Power"].filter_enabled is False


def test_invalid_entries_are_skipped_with_warning(tmp_path, caplog):
    _write(tmp_path / "guides.yml", """
        - type: guideEntry
          id: NoText
          name: guide-entry-no-text
        - type: guideEntry
          id: BadPriority
          name: x
          text: /x.txt
          priority: high
        - type: guideEntry
          id: Ok
          name: ok
          text: /ok.txt
        """)
    with caplog.at_level(logging.WARNING, logger="guidebook.core.prototypes"):
        entries = load_guide_entries([tmp_path / "guides.yml"])

    assert list(entries) == ["Ok"]
    assert "NoText" in caplog.text
    assert "BadPriority" in caplog.text


def test_later_files_redefine_entries(tmp_path, caplog):
    _write(tmp_path / "a.yml", """
        - {type: guideEntry, id: Dup, name: first, text: /a.txt}
        """)
    _write(tmp_path / "nested" / "b.yaml", """
        - {type: guideEntry, id: Dup, name: second, text: /b.txt}
        """)
    with caplog.at_level(logging.WARNING, logger="guidebook.core.prototypes"):
        entries = load_guide_entries([tmp_path])
    assert entries["Dup"].name == "second"
    assert "redefined" in caplog.text


def test_unreadable_yaml_raises(tmp_path):
    bad = _write(tmp_path / "bad.yml", "- type: guideEntry\n  id: [unclosed\n")
    with pytest.raises(PrototypeError) as excinfo:
        load_guide_entries([bad])
    assert "bad.yml" in str(excinfo.value)


def test_missing_paths_and_non_list_files_yield_nothing(tmp_path):
    _write(tmp_path / "mapping.yml", "type: guideEntry\nid: A\n")
    assert load_guide_entries([tmp_path / "missing", tmp_path / "mapping.yml"]) == {}


def test_from_mapping_reports_missing_fields():
    with pytest.raises(PrototypeError) as excinfo:
        GuideEntry.from_mapping({"id": "A"})
    assert excinfo.value.entry_id == "A"
    assert excinfo.value.validation_errors == ["missing field 'name'", "missing field 'text'"]
    assert str(excinfo.value).startswith("[Entry: A]")


def test_sample_guides_load():
    entries = load_guide_entries([SAMPLE_CONTENT_ROOT / "Prototypes"])
    assert {"NewPlayer", "Controls", "Glossary", "Engineering", "Power", "Credits"} <= set(entries)
    for entry in entries.values():
        assert (SAMPLE_CONTENT_ROOT / entry.text.lstrip("/")).is_file()
