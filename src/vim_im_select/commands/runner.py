"""Thin async boundary around the platform shell."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Protocol

from vim_im_select.runtime import telemetry


@dataclass(frozen=True, slots=True)
class CommandResult:
    command: str
    stdout: str
    stderr: str = ""
    returncode: int = 0


class CommandFailure(RuntimeError):
    """Raised when a shell command cannot be started or exits non-zero."""

    def __init__(
        self,
        command: str,
        message: str,
        *,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class MissingCommandError(CommandFailure):
    """Raised for a blank command template; nothing is spawned."""

    def __init__(self, command: str) -> None:
        super().__init__(command, "Command is not configured")


class CommandRunner(Protocol):
    async def run(self, command: str) -> CommandResult: ...


def _decode(data: Optional[bytes]) -> str:
    return (data or b"").decode(errors="replace")


class ShellCommandRunner:
    """Runs opaque, user-authored command strings through the system shell.

    No timeout, retry or output limit is applied. The command string is
    passed through untouched.
    """

    def __init__(self) -> None:
        self.logger = telemetry.get_logger("vim_im_select.commands")

    async def run(self, command: str) -> CommandResult:
        if not command.strip():
            raise MissingCommandError(command)

        with telemetry.span(
            "commands::run",
            logger_name="vim_im_select.commands",
            metadata={"command": command},
        ) as handle:
            try:
                proc = await asyncio.create_subprocess_shell(
                    command,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
                stdout, stderr = await proc.communicate()
            except (OSError, ValueError) as exc:
                # ValueError: the shell refuses strings such as ones with NUL bytes
                raise CommandFailure(command, str(exc)) from exc

            result = CommandResult(
                command=command,
                stdout=_decode(stdout),
                stderr=_decode(stderr),
                returncode=proc.returncode or 0,
            )
            handle.add_metadata("returncode", result.returncode)
            if result.returncode != 0:
                detail = result.stderr.strip() or f"exit status {result.returncode}"
                raise CommandFailure(
                    command,
                    f"Command failed: {command}\n{detail}",
                    returncode=result.returncode,
                    stderr=result.stderr,
                )
            self.logger.debug(f"ran {command!r} -> {result.stdout.strip()!r}")
            return result


__all__ = [
    "CommandFailure",
    "CommandResult",
    "CommandRunner",
    "MissingCommandError",
    "ShellCommandRunner",
]
