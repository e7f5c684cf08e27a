"""Data models for the sync tool."""

from .config import (
    DRIVE_SCOPE,
    ConverterSettings,
    DocSyncConfig,
    DriveSettings,
)

__all__ = [
    "DRIVE_SCOPE",
    "ConverterSettings",
    "DocSyncConfig",
    "DriveSettings",
]
