"""Key-driven modal state for the Textual demo editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from vim_im_select.host import BusModeSource

NORMAL = "normal"
INSERT = "insert"
VISUAL = "visual"

# keys that leave normal (or visual) mode
_ENTER_KEYS: Dict[str, str] = {
    "i": INSERT,
    "a": INSERT,
    "o": INSERT,
    "s": INSERT,
    "I": INSERT,
    "A": INSERT,
    "O": INSERT,
    "S": INSERT,
    "v": VISUAL,
    "V": VISUAL,
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_mode: Callable[[str], None] = _noop
    insert_text: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Tracks the demo editor's mode and reports changes as notifications.

    Only mode changes are emitted, in the ``{"mode": ...}`` shape an editor's
    vim layer produces; the IME logic lives behind the mode source.
    """

    def __init__(
        self, source: BusModeSource, hooks: Optional[TextualUIHooks] = None
    ) -> None:
        self.source = source
        self.hooks = hooks or TextualUIHooks()
        self.mode = NORMAL

    def reset(self) -> None:
        """Return to normal mode without emitting, as when a document opens."""

        self.mode = NORMAL
        self.hooks.update_mode(self.mode)

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> str:
        """Apply one key press and return the mode afterwards."""

        if key in {"ESC", "escape"}:
            if self.mode != NORMAL:
                self._switch(NORMAL)
            return self.mode

        if self.mode == INSERT:
            if text:
                self.hooks.insert_text(text)
            return self.mode

        target = _ENTER_KEYS.get(text or key)
        if target is not None and target != self.mode:
            self._switch(target)
        return self.mode

    def _switch(self, mode: str) -> None:
        previous, self.mode = self.mode, mode
        self.hooks.log(f"mode {previous} -> {mode}")
        self.hooks.update_mode(mode)
        self.source.emit_mode({"mode": mode})


__all__ = ["INSERT", "NORMAL", "VISUAL", "TextualEditorAdapter", "TextualUIHooks"]
