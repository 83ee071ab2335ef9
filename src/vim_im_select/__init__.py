"""Keeps an external input method in sync with a modal editor's mode."""

__all__ = [
    "adapters",
    "commands",
    "host",
    "ime",
    "runtime",
    "settings",
]

__version__ = "0.1.0"
