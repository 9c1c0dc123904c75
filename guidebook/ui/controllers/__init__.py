from .guidebook_controller import GuidebookController

__all__ = [
    "GuidebookController",
]
