"""Rich-text field editing: engine, command surface and reconciler."""

from __future__ import annotations

from .commands import CommandButton, CommandSurface
from .field import DEFAULT_PLACEHOLDER, RichTextField, Selection
from .reconciler import FieldReconciler

__all__ = [
    "CommandButton",
    "CommandSurface",
    "DEFAULT_PLACEHOLDER",
    "FieldReconciler",
    "RichTextField",
    "Selection",
]
