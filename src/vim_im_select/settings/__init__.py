"""Settings data model and persistence."""

from .models import (
    INSERTION_MODE_PREVIOUS,
    PlatformSettings,
    RawSettings,
    Settings,
    from_persisted,
    to_persisted,
)
from .store import (
    JsonSettingsStore,
    MemorySettingsStore,
    SettingsError,
    SettingsStore,
    load_settings,
    merge_defaults,
    save_settings,
)

__all__ = [
    "INSERTION_MODE_PREVIOUS",
    "PlatformSettings",
    "RawSettings",
    "Settings",
    "from_persisted",
    "to_persisted",
    "JsonSettingsStore",
    "MemorySettingsStore",
    "SettingsError",
    "SettingsStore",
    "load_settings",
    "merge_defaults",
    "save_settings",
]
