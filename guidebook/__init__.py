"""Top-level package for the guidebook viewer.

The core (entry model, tree building) is GUI-agnostic; the Tk front-end in
:mod:`guidebook.ui` and the launcher in :mod:`guidebook.app` depend on it,
never the other way round.
"""

from .core.models import GuideEntry  # re-export for convenience

__all__: list[str] = [
    "GuideEntry",
]
