from __future__ import annotations

"""Loading of ``guideEntry`` prototypes from YAML files.

A prototype file is a YAML list of mappings; every mapping with
``type: guideEntry`` describes one entry::

    - type: guideEntry
      id: Engineering
      name: guide-entry-engineering
      text: "/Guidebook/Engineering.txt"
      children:
      - Power
      priority: 1
      filterEnabled: true

Other prototype types are ignored so guide entries can live next to
unrelated data.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Union

import yaml

from guidebook.core.exceptions import PrototypeError
from guidebook.core.models import GuideEntry

logger = logging.getLogger(__name__)

__all__ = ["GUIDE_ENTRY_TYPE", "load_guide_entries", "iter_prototype_files"]

GUIDE_ENTRY_TYPE = "guideEntry"
_YAML_SUFFIXES = {".yml", ".yaml"}


def iter_prototype_files(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Expand files and directories into a sorted list of YAML files."""
    files: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.suffix.lower() in _YAML_SUFFIXES and p.is_file()))
        elif path.is_file():
            files.append(path)
        else:
            logger.warning("Prototype path does not exist: %s", path)
    return files


def load_guide_entries(paths: Iterable[Union[str, Path]]) -> Dict[str, GuideEntry]:
    """Load every guide entry prototype found under ``paths``.

    Raises
    ------
    PrototypeError
        If a file cannot be read or is not valid YAML.
    """
    entries: Dict[str, GuideEntry] = {}
    for file_path in iter_prototype_files(paths):
        for entry in _load_file(file_path):
            if entry.id in entries:
                logger.warning("Guide entry %s redefined in %s", entry.id, file_path)
            entries[entry.id] = entry
    logger.info("Loaded %d guide entries", len(entries))
    return entries


def _load_file(file_path: Path) -> List[GuideEntry]:
    try:
        documents = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise PrototypeError(f"Could not read prototype file {file_path}: {exc}", cause=exc) from exc

    if documents is None:
        return []
    if not isinstance(documents, list):
        logger.warning("Prototype file %s is not a list; skipped", file_path)
        return []

    loaded: List[GuideEntry] = []
    for position, data in enumerate(documents):
        if not isinstance(data, dict) or data.get("type") != GUIDE_ENTRY_TYPE:
            continue
        try:
            loaded.append(GuideEntry.from_mapping(data))
        except PrototypeError as exc:
            logger.warning("Skipping invalid guide entry #%d in %s: %s %s",
                           position, file_path, exc, exc.validation_errors)
    return loaded
