"""Plugin lifecycle: loads settings and wires host events into the engine."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine, List, Optional, Set

from vim_im_select.commands import CommandRunner, ShellCommandRunner
from vim_im_select.ime import (
    EngineState,
    ErrorReporter,
    ImeSwitcher,
    LoggingErrorReporter,
    ModeTransitionEngine,
)
from vim_im_select.runtime import telemetry
from vim_im_select.runtime.platform import Platform, PlatformConfig, detect_platform
from vim_im_select.settings import (
    Settings,
    SettingsStore,
    load_settings,
    save_settings,
    to_persisted,
)

from .bus import EditorHost, ModeSource, Unsubscribe


class VimImPlugin:
    """Owns one engine for the lifetime of an activation.

    Host callbacks are synchronous. Each one schedules the matching engine
    coroutine as its own task, so a command that never exits only stalls
    its own task.
    """

    def __init__(
        self,
        host: EditorHost,
        store: SettingsStore,
        *,
        runner: Optional[CommandRunner] = None,
        reporter: Optional[ErrorReporter] = None,
        os_type: Optional[str] = None,
    ) -> None:
        self.host = host
        self.store = store
        self.runner = runner or ShellCommandRunner()
        self.reporter = reporter or LoggingErrorReporter()
        self._os_type = os_type
        self.logger = telemetry.get_logger("vim_im_select.host")

        self.settings: Optional[Settings] = None
        self.state: Optional[EngineState] = None
        self.engine: Optional[ModeTransitionEngine] = None
        self._subscriptions: List[Unsubscribe] = []
        self._editor_unsubscribe: Optional[Unsubscribe] = None
        self._tasks: Set[asyncio.Task[None]] = set()

    @property
    def active(self) -> bool:
        return self.engine is not None

    @property
    def platform(self) -> Platform:
        if self.state is None:
            raise RuntimeError("Plugin is not active")
        return self.state.platform

    def activate(self) -> ModeTransitionEngine:
        if self.engine is not None:
            return self.engine

        settings = load_settings(self.store)
        platform = detect_platform(self._os_type)
        state = EngineState(platform=platform)
        switcher = ImeSwitcher(
            PlatformConfig(settings, platform), self.runner, state, self.reporter
        )
        engine = ModeTransitionEngine(
            switcher, state, normal_mode_on_focus=settings.normal_mode_on_focus
        )
        self.settings, self.state, self.engine = settings, state, engine

        if platform is Platform.WINDOWS_LIKE:
            self.logger.info("Using Windows settings")

        self._subscriptions.append(
            self.host.on_active_editor_change(self._on_active_editor_change)
        )
        self._subscriptions.append(self.host.on_document_open(self._on_document_open))
        # registered once; toggling the flag later needs a reactivation
        if settings.normal_mode_on_focus:
            self._subscriptions.append(
                self.host.on_focus_gained(self._on_focus_gained)
            )
        telemetry.record_event(
            "plugin.activate",
            data={"platform": platform.value, "focus": settings.normal_mode_on_focus},
            logger_name="vim_im_select.host",
        )
        return engine

    def deactivate(self) -> None:
        self._detach_editor()
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()
        self.settings = self.state = self.engine = None
        telemetry.record_event("plugin.deactivate", logger_name="vim_im_select.host")

    async def drain(self) -> None:
        """Wait for every scheduled engine task to finish."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def update_settings(self, mutator: Callable[[Settings], Any]) -> bool:
        """Apply a live edit from a settings surface.

        The store is only written when the edit changed something; returns
        whether it did.
        """

        if self.settings is None:
            raise RuntimeError("Plugin is not active")
        before = to_persisted(self.settings)
        mutator(self.settings)
        if to_persisted(self.settings) == before:
            return False
        self.save_settings()
        return True

    def save_settings(self) -> None:
        if self.settings is None:
            raise RuntimeError("Plugin is not active")
        save_settings(self.store, self.settings)

    def _require_engine(self) -> ModeTransitionEngine:
        if self.engine is None:
            raise RuntimeError("Plugin is not active")
        return self.engine

    def _schedule(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _on_active_editor_change(self, editor: Optional[ModeSource]) -> None:
        self._detach_editor()
        if editor is None:
            return
        self._editor_unsubscribe = editor.subscribe(self._on_mode_change)

    def _detach_editor(self) -> None:
        if self._editor_unsubscribe is not None:
            self._editor_unsubscribe()
            self._editor_unsubscribe = None

    def _on_mode_change(self, payload: Any) -> None:
        self._schedule(self._require_engine().on_mode_notification(payload))

    def _on_document_open(self) -> None:
        self._schedule(self._require_engine().on_document_open())

    def _on_focus_gained(self) -> None:
        self._schedule(self._require_engine().on_focus_gained())


__all__ = ["VimImPlugin"]
