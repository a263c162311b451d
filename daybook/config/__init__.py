"""Configuration package."""

from daybook.config.settings import (
    STORAGE_BACKENDS,
    AppSettings,
    GoogleSheetsSettings,
    LocalStorageSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "STORAGE_BACKENDS",
    "AppSettings",
    "GoogleSheetsSettings",
    "LocalStorageSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
