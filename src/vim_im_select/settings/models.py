"""Dataclasses describing per-platform IME settings and their persisted shape."""

from __future__ import annotations

from dataclasses import dataclass, field

INSERTION_MODE_PREVIOUS = "_PREVIOUS_"


@dataclass(slots=True)
class PlatformSettings:
    """IM identifiers and command templates for one OS family.

    All four values are opaque strings. ``insertion_im`` may hold
    ``INSERTION_MODE_PREVIOUS`` to restore whatever IME was active before
    insertion mode was last left. ``switch_cmd`` carries an ``{im}``
    placeholder.
    """

    normal_im: str = ""
    insertion_im: str = INSERTION_MODE_PREVIOUS
    obtain_cmd: str = ""
    switch_cmd: str = ""


@dataclass(slots=True)
class Settings:
    """Nested settings the engine operates on."""

    normal_mode_on_focus: bool = False
    default: PlatformSettings = field(default_factory=PlatformSettings)
    windows: PlatformSettings = field(default_factory=PlatformSettings)


@dataclass(frozen=True, slots=True)
class RawSettings:
    """Flat record written to disk.

    Field names map onto the persisted camelCase keys (``defaultIM``,
    ``windowsSwitchCmd``...) in ``vim_im_select.settings.store``.
    """

    normal_mode_on_focus: bool = False
    default_im: str = ""
    insertion_im: str = INSERTION_MODE_PREVIOUS
    obtain_cmd: str = ""
    switch_cmd: str = ""
    windows_default_im: str = ""
    windows_insertion_im: str = INSERTION_MODE_PREVIOUS
    windows_obtain_cmd: str = ""
    windows_switch_cmd: str = ""


def from_persisted(raw: RawSettings) -> Settings:
    return Settings(
        normal_mode_on_focus=raw.normal_mode_on_focus,
        default=PlatformSettings(
            normal_im=raw.default_im,
            insertion_im=raw.insertion_im,
            obtain_cmd=raw.obtain_cmd,
            switch_cmd=raw.switch_cmd,
        ),
        windows=PlatformSettings(
            normal_im=raw.windows_default_im,
            insertion_im=raw.windows_insertion_im,
            obtain_cmd=raw.windows_obtain_cmd,
            switch_cmd=raw.windows_switch_cmd,
        ),
    )


def to_persisted(settings: Settings) -> RawSettings:
    return RawSettings(
        normal_mode_on_focus=settings.normal_mode_on_focus,
        default_im=settings.default.normal_im,
        insertion_im=settings.default.insertion_im,
        obtain_cmd=settings.default.obtain_cmd,
        switch_cmd=settings.default.switch_cmd,
        windows_default_im=settings.windows.normal_im,
        windows_insertion_im=settings.windows.insertion_im,
        windows_obtain_cmd=settings.windows.obtain_cmd,
        windows_switch_cmd=settings.windows.switch_cmd,
    )


__all__ = [
    "INSERTION_MODE_PREVIOUS",
    "PlatformSettings",
    "RawSettings",
    "Settings",
    "from_persisted",
    "to_persisted",
]
