from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from guidebook.core.exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)

__all__ = ["ContentResources", "SAMPLE_CONTENT_ROOT", "resolve_content_root"]

SAMPLE_CONTENT_ROOT = Path(__file__).resolve().parent.parent / "sample_guides"


def resolve_content_root(configured: Optional[Union[str, Path]]) -> Path:
    """Return the configured content root, or the packaged sample guides."""
    if configured:
        return Path(configured).expanduser()
    return SAMPLE_CONTENT_ROOT


class ContentResources:
    """Resolve guide content references below a content root.

    References are opaque strings such as ``/Guidebook/Intro.txt``; a leading
    slash is relative to the root, never to the file system root.
    """

    def __init__(self, root: Union[str, Path], encoding: str = "utf-8") -> None:
        self.root = Path(root).resolve()
        self.encoding = encoding

    def resolve(self, reference: str) -> Path:
        """Return the file path for ``reference`` or raise ResourceNotFoundError."""
        relative = str(reference or "").replace("\\", "/").lstrip("/")
        if not relative:
            raise ResourceNotFoundError(reference)
        path = (self.root / relative).resolve()
        try:
            path.relative_to(self.root)
        except ValueError as exc:
            raise ResourceNotFoundError(reference, cause=exc) from exc
        if not path.is_file():
            raise ResourceNotFoundError(reference)
        return path

    @contextmanager
    def open_text(self, reference: str) -> Iterator[TextIO]:
        """Open ``reference`` for reading; the stream is closed on exit."""
        path = self.resolve(reference)
        logger.debug("Opening content resource %s -> %s", reference, path)
        with path.open("r", encoding=self.encoding, errors="replace") as fh:
            yield fh

    def read_text(self, reference: str) -> str:
        with self.open_text(reference) as fh:
            return fh.read()
