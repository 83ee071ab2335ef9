"""Runtime services: telemetry and host platform detection."""

from .platform import Platform, PlatformConfig, detect_platform, os_type

__all__ = ["Platform", "PlatformConfig", "detect_platform", "os_type"]
