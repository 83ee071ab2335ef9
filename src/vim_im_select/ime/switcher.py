"""Switches the external IME through the configured shell commands."""

from __future__ import annotations

from typing import Optional

from vim_im_select.commands import CommandFailure, CommandRunner
from vim_im_select.runtime import telemetry
from vim_im_select.runtime.platform import PlatformConfig
from vim_im_select.settings.models import INSERTION_MODE_PREVIOUS

from .errors import ErrorReporter, ObtainCommandFailure, SwitchCommandFailure
from .state import EngineState

IM_PLACEHOLDER = "{im}"

OBTAIN_ERROR_MESSAGE = "An error occurred while obtaining the current IME"
SWITCH_ERROR_MESSAGE = "An error occurred while switching IME mode"


def substitute_im(template: str, im: str) -> str:
    """Replace the first ``{im}`` in ``template``; later ones are left as-is."""

    return template.replace(IM_PLACEHOLDER, im, 1)


class ImeSwitcher:
    """Implements ``enter_insertion`` and ``enter_normal`` for one engine.

    Command failures are reported and swallowed here; nothing raised by the
    runner reaches the caller.
    """

    def __init__(
        self,
        config: PlatformConfig,
        runner: CommandRunner,
        state: EngineState,
        reporter: ErrorReporter,
    ) -> None:
        self.config = config
        self.runner = runner
        self.state = state
        self.reporter = reporter
        self.logger = telemetry.get_logger("vim_im_select.switcher")

    def resolve_insertion_im(self) -> Optional[str]:
        mode = self.config.settings.insertion_im
        if mode == INSERTION_MODE_PREVIOUS:
            return self.state.previous_ime_mode
        return mode

    async def enter_insertion(self) -> None:
        im = self.resolve_insertion_im()
        if im is None:
            self.logger.debug("no IME captured yet, insertion switch skipped")
            return
        await self.exec_switch(im)

    async def enter_normal(self) -> None:
        await self.capture_current()
        await self.exec_switch(self.config.settings.normal_im)

    async def capture_current(self) -> Optional[str]:
        """Run the obtain command and snapshot its output.

        The previous snapshot is kept when the command fails.
        """

        command = self.config.settings.obtain_cmd
        try:
            result = await self.runner.run(command)
        except CommandFailure as failure:
            self.reporter(
                OBTAIN_ERROR_MESSAGE,
                ObtainCommandFailure(OBTAIN_ERROR_MESSAGE, failure),
            )
            return None

        self.state.previous_ime_mode = result.stdout.strip()
        telemetry.record_event(
            "ime.capture",
            level="debug",
            data={"im": self.state.previous_ime_mode},
            logger_name="vim_im_select.switcher",
        )
        return self.state.previous_ime_mode

    async def exec_switch(self, im: str) -> bool:
        command = substitute_im(self.config.settings.switch_cmd, im)
        try:
            await self.runner.run(command)
        except CommandFailure as failure:
            self.reporter(
                SWITCH_ERROR_MESSAGE,
                SwitchCommandFailure(SWITCH_ERROR_MESSAGE, failure, im),
            )
            return False

        telemetry.record_event(
            "ime.switch",
            data={"im": im, "platform": self.config.platform.value},
            logger_name="vim_im_select.switcher",
        )
        return True


__all__ = [
    "IM_PLACEHOLDER",
    "ImeSwitcher",
    "OBTAIN_ERROR_MESSAGE",
    "SWITCH_ERROR_MESSAGE",
    "substitute_im",
]
