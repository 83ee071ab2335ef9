from __future__ import annotations

from typing import Any, List

from vim_im_select.adapters.textual import TextualEditorAdapter, TextualUIHooks
from vim_im_select.host import BusModeSource


def make_adapter():
    source = BusModeSource()
    emitted: List[Any] = []
    modes: List[str] = []
    typed: List[str] = []
    source.subscribe(emitted.append)
    hooks = TextualUIHooks(update_mode=modes.append, insert_text=typed.append)
    return TextualEditorAdapter(source, hooks), emitted, modes, typed


def test_insert_and_escape_emit_mode_changes() -> None:
    adapter, emitted, modes, _ = make_adapter()

    adapter.handle_textual_key("i", text="i")
    adapter.handle_textual_key("ESC")

    assert emitted == [{"mode": "insert"}, {"mode": "normal"}]
    assert modes == ["insert", "normal"]


def test_text_in_insert_mode_is_inserted_not_emitted() -> None:
    adapter, emitted, _, typed = make_adapter()

    adapter.handle_textual_key("a", text="a")
    adapter.handle_textual_key("v", text="v")
    adapter.handle_textual_key("i", text="i")

    assert emitted == [{"mode": "insert"}]
    assert typed == ["v", "i"]


def test_visual_mode_round_trip() -> None:
    adapter, emitted, _, _ = make_adapter()

    adapter.handle_textual_key("v", text="v")
    adapter.handle_textual_key("ESC")

    assert emitted == [{"mode": "visual"}, {"mode": "normal"}]


def test_escape_in_normal_mode_is_silent() -> None:
    adapter, emitted, _, _ = make_adapter()

    adapter.handle_textual_key("ESC")
    adapter.handle_textual_key("x", text="x")

    assert emitted == []
    assert adapter.mode == "normal"


def test_reset_returns_to_normal_without_emitting() -> None:
    adapter, emitted, modes, _ = make_adapter()
    adapter.handle_textual_key("o", text="o")

    adapter.reset()

    assert adapter.mode == "normal"
    assert emitted == [{"mode": "insert"}]
    assert modes[-1] == "normal"
