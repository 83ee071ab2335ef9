"""Mutable state owned by one engine instance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from vim_im_select.runtime.platform import Platform

INSERT_MODE = "insert"


@dataclass(slots=True)
class EngineState:
    """Remembered editor mode and IME snapshot.

    ``previous_ime_mode`` stays ``None`` until an obtain command succeeds.
    ``previous_vim_mode`` starts empty, which counts as a non-insert mode.
    """

    platform: Platform = Platform.DEFAULT
    previous_ime_mode: Optional[str] = None
    previous_vim_mode: str = ""

    @property
    def in_insert(self) -> bool:
        return self.previous_vim_mode == INSERT_MODE


__all__ = ["EngineState", "INSERT_MODE"]
