from __future__ import annotations

import asyncio
from typing import Any, List, Sequence

import pytest

from vim_im_select.ime import (
    EngineState,
    ModeNotification,
    ModeTransitionEngine,
    decode_notification,
)


class FakeSwitcher:
    def __init__(self) -> None:
        self.calls: List[str] = []

    async def enter_insertion(self) -> None:
        self.calls.append("insertion")

    async def enter_normal(self) -> None:
        self.calls.append("normal")


class FailingSwitcher(FakeSwitcher):
    async def enter_insertion(self) -> None:
        raise RuntimeError("host went away")


def make_engine(*, focus: bool = False, switcher: Any = None) -> ModeTransitionEngine:
    return ModeTransitionEngine(
        switcher or FakeSwitcher(), EngineState(), normal_mode_on_focus=focus
    )


def feed(engine: ModeTransitionEngine, modes: Sequence[Any]) -> List[str]:
    async def scenario() -> None:
        for mode in modes:
            await engine.on_mode_notification(mode)

    asyncio.run(scenario())
    return engine.switcher.calls


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"mode": "insert"}, ModeNotification("insert")),
        ({"mode": "visual", "subMode": "linewise"}, ModeNotification("visual")),
        ("normal", ModeNotification("normal")),
        (ModeNotification("replace"), ModeNotification("replace")),
        ({}, None),
        (None, None),
        ({"mode": ""}, None),
        ({"mode": 3}, None),
        ("", None),
    ],
)
def test_decode_notification(payload: Any, expected: Any) -> None:
    assert decode_notification(payload) == expected


def test_decode_notification_reads_attribute() -> None:
    class Payload:
        mode = "insert"

    assert decode_notification(Payload()) == ModeNotification("insert")


def test_first_insert_fires_insertion() -> None:
    engine = make_engine()

    assert feed(engine, [{"mode": "insert"}]) == ["insertion"]
    assert engine.state.previous_vim_mode == "insert"


def test_insert_then_normal_fires_both_in_order() -> None:
    engine = make_engine()

    calls = feed(engine, [{"mode": "normal"}, {"mode": "insert"}, {"mode": "normal"}])

    assert calls == ["insertion", "normal"]


def test_non_insert_transitions_do_nothing() -> None:
    engine = make_engine()

    calls = feed(engine, [{"mode": "normal"}, {"mode": "visual"}, {"mode": "normal"}])

    assert calls == []
    assert engine.state.previous_vim_mode == "normal"


def test_repeated_insert_is_not_deduplicated() -> None:
    engine = make_engine()

    calls = feed(engine, ["insert", "insert", "insert", "normal"])

    assert calls == ["insertion", "insertion", "insertion", "normal"]


def test_leaving_insert_for_visual_fires_normal() -> None:
    engine = make_engine()

    calls = feed(engine, ["insert", "visual", "normal"])

    assert calls == ["insertion", "normal"]


def test_empty_payload_leaves_state_untouched() -> None:
    engine = make_engine()

    calls = feed(engine, ["insert", {}, None, "normal"])

    assert calls == ["insertion", "normal"]


def test_previous_mode_updated_when_dispatch_fails() -> None:
    engine = make_engine(switcher=FailingSwitcher())

    with pytest.raises(RuntimeError):
        asyncio.run(engine.on_mode_notification({"mode": "insert"}))

    assert engine.state.previous_vim_mode == "insert"


def test_document_open_always_enters_normal() -> None:
    engine = make_engine()
    engine.state.previous_vim_mode = "insert"

    asyncio.run(engine.on_document_open())
    engine.state.previous_vim_mode = "normal"
    asyncio.run(engine.on_document_open())

    assert engine.switcher.calls == ["normal", "normal"]


def test_focus_ignored_when_disabled() -> None:
    engine = make_engine(focus=False)

    asyncio.run(engine.on_focus_gained())

    assert engine.switcher.calls == []


def test_focus_enters_normal_outside_insert() -> None:
    engine = make_engine(focus=True)

    asyncio.run(engine.on_focus_gained())
    feed(engine, ["insert"])
    asyncio.run(engine.on_focus_gained())

    assert engine.switcher.calls == ["normal", "insertion"]


def test_engines_do_not_share_state() -> None:
    first = make_engine()
    second = make_engine()

    feed(first, ["insert"])

    assert second.state.previous_vim_mode == ""
    assert feed(second, ["normal"]) == []


class BlockingSwitcher(FakeSwitcher):
    def __init__(self) -> None:
        super().__init__()
        self.gate = asyncio.Event()

    async def enter_insertion(self) -> None:
        await self.gate.wait()
        await super().enter_insertion()


def test_mode_recorded_before_dispatch_completes() -> None:
    switcher = BlockingSwitcher()
    engine = make_engine(switcher=switcher)

    async def scenario() -> None:
        pending = asyncio.ensure_future(engine.on_mode_notification("insert"))
        await asyncio.sleep(0)
        assert engine.state.previous_vim_mode == "insert"
        await engine.on_mode_notification("normal")
        switcher.gate.set()
        await pending

    asyncio.run(scenario())

    assert switcher.calls == ["normal", "insertion"]
    assert engine.state.previous_vim_mode == "normal"
