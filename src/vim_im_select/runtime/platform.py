"""Host platform detection and per-platform settings lookup."""

from __future__ import annotations

import platform as _platform
from enum import Enum
from typing import Optional

from vim_im_select.runtime import telemetry
from vim_im_select.settings.models import PlatformSettings, Settings

WINDOWS_NT = "Windows_NT"

# platform.system() names mapped onto the os.type() vocabulary
_SYSTEM_TO_OS_TYPE = {
    "Windows": WINDOWS_NT,
    "Darwin": "Darwin",
    "Linux": "Linux",
}


class Platform(str, Enum):
    """Platform families that carry their own settings block."""

    DEFAULT = "default"
    WINDOWS_LIKE = "windows"


def os_type() -> str:
    """Return the host OS identifier (``Windows_NT``, ``Darwin``, ``Linux``...)."""

    system = _platform.system()
    return _SYSTEM_TO_OS_TYPE.get(system, system)


def detect_platform(reported: Optional[str] = None) -> Platform:
    """Pick the settings family for an OS report.

    Only the Windows NT family selects ``WINDOWS_LIKE``; macOS, Linux and
    anything unrecognised (including an empty report) share ``DEFAULT``.
    """

    if reported is None:
        reported = os_type()
    detected = Platform.WINDOWS_LIKE if reported == WINDOWS_NT else Platform.DEFAULT
    telemetry.record_event(
        "platform.detect",
        data={"os_type": reported or "?", "platform": detected.value},
        logger_name="vim_im_select.host",
    )
    return detected


class PlatformConfig:
    """Resolves the ``PlatformSettings`` block for the active platform.

    Lookups read through to ``Settings`` each time, so edits made from a
    settings surface apply to the next command without rebuilding anything.
    """

    def __init__(self, settings: Settings, platform: Platform) -> None:
        self._settings = settings
        self._platform = platform

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def settings(self) -> PlatformSettings:
        if self._platform is Platform.WINDOWS_LIKE:
            return self._settings.windows
        return self._settings.default


__all__ = ["Platform", "PlatformConfig", "WINDOWS_NT", "detect_platform", "os_type"]
