from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Tuple

import pytest

from vim_im_select.commands import CommandFailure, CommandResult, MissingCommandError


class RecordingRunner:
    """Command runner that records every command instead of spawning it."""

    def __init__(self) -> None:
        self.commands: List[str] = []
        self.outputs: Dict[str, str] = {}
        self.failing: set[str] = set()

    async def run(self, command: str) -> CommandResult:
        self.commands.append(command)
        if not command.strip():
            raise MissingCommandError(command)
        if command in self.failing:
            raise CommandFailure(command, "boom", returncode=1, stderr="boom")
        return CommandResult(command=command, stdout=self.outputs.get(command, ""))


class GatedRunner(RecordingRunner):
    """Recording runner whose held commands wait until ``release`` is called.

    ``commands`` lists commands in completion order; ``started`` lists the held
    ones as they begin waiting.
    """

    def __init__(self) -> None:
        super().__init__()
        self.held: set[str] = set()
        self.started: List[str] = []
        self._gate: asyncio.Event | None = None

    @property
    def gate(self) -> asyncio.Event:
        if self._gate is None:
            self._gate = asyncio.Event()
        return self._gate

    async def run(self, command: str) -> CommandResult:
        if command in self.held:
            self.started.append(command)
            await self.gate.wait()
        return await super().run(command)

    def release(self) -> None:
        self.gate.set()


class RecordingReporter:
    def __init__(self) -> None:
        self.reports: List[Tuple[str, Any]] = []

    def __call__(self, message: str, error: Any) -> None:
        self.reports.append((message, error))


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def gated_runner() -> GatedRunner:
    return GatedRunner()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
