"""Guidebook UI package.

Tkinter widgets and the GUI-agnostic controller that drives them.
"""

from .controllers.guidebook_controller import GuidebookController  # noqa: F401

__all__: list[str] = [
    "GuidebookController",
]
