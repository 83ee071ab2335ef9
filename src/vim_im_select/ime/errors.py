"""Error kinds raised around IME commands and the sink that reports them."""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

from vim_im_select.commands import CommandFailure
from vim_im_select.runtime import telemetry


class ImeError(RuntimeError):
    """Base class for failures while querying or switching the IME."""

    def __init__(self, message: str, failure: CommandFailure) -> None:
        super().__init__(f"{message} ({failure})")
        self.failure = failure
        self.command = failure.command


class ObtainCommandFailure(ImeError):
    """The obtain command could not report the active IME."""


class SwitchCommandFailure(ImeError):
    """The switch command could not select the requested IME."""

    def __init__(self, message: str, failure: CommandFailure, im: str) -> None:
        super().__init__(message, failure)
        self.im = im


class ErrorReporter(Protocol):
    def __call__(self, message: str, error: Any) -> None: ...


class LoggingErrorReporter:
    """Logs a failure and forwards a short notice to an optional UI hook."""

    def __init__(self, notify: Optional[Callable[[str], None]] = None) -> None:
        self.notify = notify
        self.logger = telemetry.get_logger("vim_im_select.errors")

    def __call__(self, message: str, error: Any) -> None:
        self.logger.error(f"{message}: {error!r}")
        if self.notify is not None:
            self.notify(f"Error: {message} ({error})")


__all__ = [
    "ErrorReporter",
    "ImeError",
    "LoggingErrorReporter",
    "ObtainCommandFailure",
    "SwitchCommandFailure",
]
