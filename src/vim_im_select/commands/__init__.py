"""Shell command execution."""

from .runner import (
    CommandFailure,
    CommandResult,
    CommandRunner,
    MissingCommandError,
    ShellCommandRunner,
)

__all__ = [
    "CommandFailure",
    "CommandResult",
    "CommandRunner",
    "MissingCommandError",
    "ShellCommandRunner",
]
