"""Mode transition engine turning editor mode changes into IME switches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from vim_im_select.runtime import telemetry

from .state import INSERT_MODE, EngineState
from .switcher import ImeSwitcher


@dataclass(frozen=True, slots=True)
class ModeNotification:
    """A decoded ``vim-mode-change`` payload."""

    mode: str


def decode_notification(payload: Any) -> Optional[ModeNotification]:
    """Decode an untyped payload from an editor adapter.

    Accepts a ``ModeNotification``, a mapping or object carrying a string
    ``mode``, or a bare mode string. Anything without a usable mode (``None``,
    ``{}``, blank strings) decodes to ``None``.
    """

    if isinstance(payload, ModeNotification):
        return payload
    if isinstance(payload, str):
        mode: Any = payload
    elif isinstance(payload, Mapping):
        mode = payload.get("mode")
    else:
        mode = getattr(payload, "mode", None)
    if not isinstance(mode, str) or not mode:
        return None
    return ModeNotification(mode)


class ModeTransitionEngine:
    """Watches mode notifications for insert/non-insert boundary crossings.

    Entering ``insert`` always fires ``enter_insertion``, even when already
    in insert. Leaving ``insert`` for any other mode fires ``enter_normal``.
    Moves between two non-insert modes do nothing.
    """

    def __init__(
        self,
        switcher: ImeSwitcher,
        state: EngineState,
        *,
        normal_mode_on_focus: bool = False,
    ) -> None:
        self.switcher = switcher
        self.state = state
        self.normal_mode_on_focus = normal_mode_on_focus
        self.logger = telemetry.get_logger("vim_im_select.engine")

    async def on_mode_notification(self, payload: Any) -> None:
        notification = decode_notification(payload)
        if notification is None:
            return

        mode = notification.mode
        previous = self.state.previous_vim_mode
        # recorded before any await so a later event sees this mode even while
        # this dispatch is still waiting on its command
        self.state.previous_vim_mode = mode
        if mode == INSERT_MODE:
            telemetry.record_event(
                "mode.enter_insert",
                data={"from": previous or "?"},
                logger_name="vim_im_select.engine",
            )
            await self.switcher.enter_insertion()
        elif previous == INSERT_MODE:
            telemetry.record_event(
                "mode.leave_insert",
                data={"to": mode},
                logger_name="vim_im_select.engine",
            )
            await self.switcher.enter_normal()

    async def on_document_open(self) -> None:
        telemetry.record_event(
            "document.open", level="debug", logger_name="vim_im_select.engine"
        )
        await self.switcher.enter_normal()

    async def on_focus_gained(self) -> None:
        if not self.normal_mode_on_focus:
            return
        if self.state.in_insert:
            return
        await self.switcher.enter_normal()


__all__ = ["ModeNotification", "ModeTransitionEngine", "decode_notification"]
