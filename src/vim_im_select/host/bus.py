"""Event bus backing in-process editor hosts."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Protocol

Unsubscribe = Callable[[], None]

ACTIVE_EDITOR_CHANGE = "active-editor-change"
DOCUMENT_OPEN = "document-open"
FOCUS_GAINED = "focus-gained"
MODE_CHANGE = "vim-mode-change"


class ModeSource(Protocol):
    """An editor instance that reports its modal state."""

    def subscribe(self, handler: Callable[[Any], None]) -> Unsubscribe: ...


class EditorHost(Protocol):
    """Notifications the plugin needs from the hosting editor."""

    def on_active_editor_change(
        self, callback: Callable[[Optional[ModeSource]], None]
    ) -> Unsubscribe: ...

    def on_document_open(self, callback: Callable[[], None]) -> Unsubscribe: ...

    def on_focus_gained(self, callback: Callable[[], None]) -> Unsubscribe: ...


class EventBus:
    """Minimal named-event bus with removable subscriptions."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[..., None]]] = {}

    def subscribe(self, event: str, callback: Callable[..., None]) -> Unsubscribe:
        self._subscribers.setdefault(event, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(event, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def emit(self, event: str, *payload: Any) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(*payload)

    def subscriber_count(self, event: str) -> int:
        return len(self._subscribers.get(event, []))


class BusModeSource:
    """Mode source for one editor; ``emit_mode`` feeds subscribed handlers."""

    def __init__(self, name: str = "editor") -> None:
        self.name = name
        self.bus = EventBus()

    def subscribe(self, handler: Callable[[Any], None]) -> Unsubscribe:
        return self.bus.subscribe(MODE_CHANGE, handler)

    def emit_mode(self, payload: Any) -> None:
        self.bus.emit(MODE_CHANGE, payload)

    @property
    def handler_count(self) -> int:
        return self.bus.subscriber_count(MODE_CHANGE)


class BusEditorHost:
    """``EditorHost`` driven by explicit calls, used by the demo app and tests."""

    def __init__(self) -> None:
        self.bus = EventBus()
        self.active_editor: Optional[BusModeSource] = None

    def on_active_editor_change(
        self, callback: Callable[[Optional[ModeSource]], None]
    ) -> Unsubscribe:
        return self.bus.subscribe(ACTIVE_EDITOR_CHANGE, callback)

    def on_document_open(self, callback: Callable[[], None]) -> Unsubscribe:
        return self.bus.subscribe(DOCUMENT_OPEN, callback)

    def on_focus_gained(self, callback: Callable[[], None]) -> Unsubscribe:
        return self.bus.subscribe(FOCUS_GAINED, callback)

    def set_active_editor(self, editor: Optional[BusModeSource]) -> None:
        self.active_editor = editor
        self.bus.emit(ACTIVE_EDITOR_CHANGE, editor)

    def open_document(self) -> None:
        self.bus.emit(DOCUMENT_OPEN)

    def gain_focus(self) -> None:
        self.bus.emit(FOCUS_GAINED)


__all__ = [
    "ACTIVE_EDITOR_CHANGE",
    "BusEditorHost",
    "BusModeSource",
    "DOCUMENT_OPEN",
    "EditorHost",
    "EventBus",
    "FOCUS_GAINED",
    "MODE_CHANGE",
    "ModeSource",
    "Unsubscribe",
]
