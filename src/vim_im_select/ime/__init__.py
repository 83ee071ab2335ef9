"""Mode transition engine and IME switching."""

from .engine import ModeNotification, ModeTransitionEngine, decode_notification
from .errors import (
    ErrorReporter,
    ImeError,
    LoggingErrorReporter,
    ObtainCommandFailure,
    SwitchCommandFailure,
)
from .state import INSERT_MODE, EngineState
from .switcher import ImeSwitcher, substitute_im

__all__ = [
    "EngineState",
    "ErrorReporter",
    "INSERT_MODE",
    "ImeError",
    "ImeSwitcher",
    "LoggingErrorReporter",
    "ModeNotification",
    "ModeTransitionEngine",
    "ObtainCommandFailure",
    "SwitchCommandFailure",
    "decode_notification",
    "substitute_im",
]
