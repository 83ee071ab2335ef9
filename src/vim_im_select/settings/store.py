"""Persisted configuration stores for ``RawSettings``."""

from __future__ import annotations

import json
import pathlib
from typing import Any, Mapping, Optional, Protocol

import cattrs
from cattrs.gen import make_dict_structure_fn, make_dict_unstructure_fn, override

from vim_im_select.runtime import telemetry

from .models import RawSettings, Settings, from_persisted, to_persisted

PERSISTED_KEYS = {
    "normal_mode_on_focus": "normalModeOnFocus",
    "default_im": "defaultIM",
    "insertion_im": "insertionIM",
    "obtain_cmd": "obtainCmd",
    "switch_cmd": "switchCmd",
    "windows_default_im": "windowsDefaultIM",
    "windows_insertion_im": "windowsInsertionIM",
    "windows_obtain_cmd": "windowsObtainCmd",
    "windows_switch_cmd": "windowsSwitchCmd",
}

_RENAMES = {name: override(rename=key) for name, key in PERSISTED_KEYS.items()}


def structure_exact(value: Any, typ: type) -> Any:
    if not isinstance(value, typ):
        raise TypeError(f"Expected {typ.__name__}, got {type(value).__name__}")
    return value


settings_converter = cattrs.Converter()
settings_converter.register_structure_hook(str, structure_exact)
settings_converter.register_structure_hook(bool, structure_exact)
settings_converter.register_unstructure_hook(
    RawSettings, make_dict_unstructure_fn(RawSettings, settings_converter, **_RENAMES)
)
settings_converter.register_structure_hook(
    RawSettings, make_dict_structure_fn(RawSettings, settings_converter, **_RENAMES)
)


class SettingsError(RuntimeError):
    """Raised when persisted settings cannot be read back."""


def merge_defaults(data: Optional[Mapping[str, Any]]) -> RawSettings:
    """Structure persisted ``data`` over the defaults.

    Missing keys keep their default value and unknown keys are ignored.
    """

    try:
        return settings_converter.structure(dict(data or {}), RawSettings)
    except (cattrs.BaseValidationError, TypeError, ValueError) as exc:
        raise SettingsError(f"Invalid settings: {exc}") from exc


def dump_raw(raw: RawSettings) -> dict[str, Any]:
    return settings_converter.unstructure(raw)


class SettingsStore(Protocol):
    def load(self) -> RawSettings: ...

    def save(self, raw: RawSettings) -> None: ...


class MemorySettingsStore:
    """Keeps the persisted mapping in memory."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self.data: dict[str, Any] = dict(data or {})

    def load(self) -> RawSettings:
        return merge_defaults(self.data)

    def save(self, raw: RawSettings) -> None:
        self.data = dump_raw(raw)


class JsonSettingsStore:
    """Reads and writes ``RawSettings`` as a JSON object on disk."""

    def __init__(self, path: pathlib.Path | str) -> None:
        self.path = pathlib.Path(path)
        self.logger = telemetry.get_logger("vim_im_select.settings")

    def load(self) -> RawSettings:
        if not self.path.exists():
            self.logger.info(f"No settings at {self.path}, using defaults")
            return RawSettings()
        try:
            with self.path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise SettingsError(f"Malformed settings file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {self.path} must hold a JSON object")
        return merge_defaults(data)

    def save(self, raw: RawSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(dump_raw(raw), handle, indent=2)
        telemetry.record_event(
            "settings.save",
            data={"path": str(self.path)},
            logger_name="vim_im_select.settings",
        )


def load_settings(store: SettingsStore) -> Settings:
    return from_persisted(store.load())


def save_settings(store: SettingsStore, settings: Settings) -> None:
    store.save(to_persisted(settings))


__all__ = [
    "JsonSettingsStore",
    "MemorySettingsStore",
    "PERSISTED_KEYS",
    "SettingsError",
    "SettingsStore",
    "dump_raw",
    "load_settings",
    "merge_defaults",
    "save_settings",
    "settings_converter",
]
