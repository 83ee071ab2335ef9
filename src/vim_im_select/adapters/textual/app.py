"""Executable Textual app that hosts the IME bridge."""

from __future__ import annotations

import argparse
import os
import pathlib
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical, VerticalScroll
    from textual.widgets import Footer, Header, Input, Label, Static, Switch
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vim_im_select.adapters.textual.app"
    ) from exc

from vim_im_select.host import BusEditorHost, BusModeSource, VimImPlugin
from vim_im_select.ime import LoggingErrorReporter
from vim_im_select.runtime import telemetry
from vim_im_select.settings import (
    INSERTION_MODE_PREVIOUS,
    JsonSettingsStore,
    PlatformSettings,
    Settings,
)

from .controller import TextualEditorAdapter, TextualUIHooks

DEFAULT_SETTINGS_PATH = pathlib.Path("~/.config/vim-im-select/settings.json")

PLATFORM_FIELDS = (
    (
        "insertion_im",
        "IME on insertion",
        f"Set to {INSERTION_MODE_PREVIOUS} to restore the previous IME",
    ),
    ("normal_im", "Default IM", "IM for normal mode"),
    ("obtain_cmd", "Obtaining command", "Command printing the current IM"),
    ("switch_cmd", "Switching command", "Use {im} as placeholder of IM"),
)


class EditorView(Static, can_focus=True):
    """Focusable text area standing in for a modal editor."""


class VimImSelectApp(App[None]):
    """Demo editor plus the settings surface for both platforms."""

    CSS = """
	Screen {
		layout: horizontal;
	}

	#editor-area {
		width: 1fr;
	}

	#editor-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
	}

	#mode-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#settings-panel {
		width: 60;
		border: round $secondary;
		padding: 0 1;
	}

	.platform-title {
		margin-top: 1;
		text-style: bold;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+o", "open_document", "Open document"),
    ]

    def __init__(self, *, settings_path: pathlib.Path) -> None:
        super().__init__()
        self.host = BusEditorHost()
        self.source = BusModeSource("demo")
        self.plugin = VimImPlugin(
            self.host,
            JsonSettingsStore(settings_path),
            reporter=LoggingErrorReporter(notify=self._notify_error),
        )
        self.plugin.activate()
        self.adapter: TextualEditorAdapter | None = None
        self._text = ""

    def compose(self) -> ComposeResult:
        settings = self.plugin.settings or Settings()
        yield Header(show_clock=True)
        with Vertical(id="editor-area"):
            yield EditorView("", id="editor-view")
            yield Static("-- NORMAL --", id="mode-line")
        with VerticalScroll(id="settings-panel"):
            with Horizontal():
                yield Label("Normal mode on window focus (restart to apply) ")
                yield Switch(value=settings.normal_mode_on_focus, id="focus-switch")
            yield from self._platform_inputs("default", "Default platform", settings.default)
            yield from self._platform_inputs("windows", "Windows platform", settings.windows)
        yield Footer()

    def _platform_inputs(
        self, prefix: str, title: str, values: PlatformSettings
    ) -> ComposeResult:
        yield Label(title, classes="platform-title")
        for field_name, label, placeholder in PLATFORM_FIELDS:
            yield Label(label)
            yield Input(
                value=getattr(values, field_name),
                placeholder=placeholder,
                id=f"{prefix}--{field_name}",
            )

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_mode=self._update_mode,
            insert_text=self._insert_text,
            log=lambda line: telemetry.get_logger("vim_im_select.host").debug(line),
        )
        self.adapter = TextualEditorAdapter(self.source, hooks)
        self.host.set_active_editor(self.source)
        self.host.open_document()
        self.query_one("#editor-view", EditorView).focus()

    def on_unmount(self) -> None:
        self.plugin.deactivate()

    def on_app_focus(self, event: events.AppFocus) -> None:
        self.host.gain_focus()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or not isinstance(self.focused, EditorView):
            return
        key = "ESC" if event.key == "escape" else event.key
        self.adapter.handle_textual_key(key, text=event.character)
        event.stop()

    def on_input_changed(self, event: Input.Changed) -> None:
        # also posted once per field on mount; unchanged values are not saved
        if not event.input.id or "--" not in event.input.id:
            return
        prefix, field_name = event.input.id.split("--", 1)
        value = event.value

        def apply(settings: Settings) -> None:
            block = settings.windows if prefix == "windows" else settings.default
            setattr(block, field_name, value)

        self.plugin.update_settings(apply)

    def on_switch_changed(self, event: Switch.Changed) -> None:
        value = event.value

        def apply(settings: Settings) -> None:
            settings.normal_mode_on_focus = value

        self.plugin.update_settings(apply)

    def action_open_document(self) -> None:
        self._text = ""
        self.query_one("#editor-view", EditorView).update("")
        if self.adapter:
            self.adapter.reset()
        self.host.open_document()

    def _update_mode(self, mode: str) -> None:
        self.query_one("#mode-line", Static).update(f"-- {mode.upper()} --")

    def _insert_text(self, text: str) -> None:
        self._text += text
        self.query_one("#editor-view", EditorView).update(self._text)

    def _notify_error(self, message: str) -> None:
        self.notify(message, severity="error", timeout=4)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep the input method in sync with a modal editor."
    )
    parser.add_argument(
        "--settings",
        type=pathlib.Path,
        default=pathlib.Path(
            os.environ.get("VIM_IM_SELECT_SETTINGS", DEFAULT_SETTINGS_PATH)
        ),
        help="Path of the JSON settings file",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        default=None,
        help="Telemetry preset to apply before start-up",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    app = VimImSelectApp(settings_path=args.settings.expanduser())
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
