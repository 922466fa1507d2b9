"""Context selection: which notes are attached to the next message."""

from .preview import PREVIEW_ERROR, load_preview
from .selector import ContextSelector, reconcile
from .workspace import Workspace

__all__ = [
    "PREVIEW_ERROR",
    "ContextSelector",
    "Workspace",
    "load_preview",
    "reconcile",
]
