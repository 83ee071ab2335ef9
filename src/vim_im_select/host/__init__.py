"""Editor host protocols and the plugin that wires them to the engine."""

from .bus import (
    BusEditorHost,
    BusModeSource,
    EditorHost,
    EventBus,
    ModeSource,
    Unsubscribe,
)
from .plugin import VimImPlugin

__all__ = [
    "BusEditorHost",
    "BusModeSource",
    "EditorHost",
    "EventBus",
    "ModeSource",
    "Unsubscribe",
    "VimImPlugin",
]
