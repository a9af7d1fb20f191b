"""Persistent crop options."""

from .manager import SettingsManager, default_settings_path
from .schema import DEFAULT_OPTIONS, OPTIONS_SCHEMA, merge_with_defaults, validate_options

__all__ = [
    "DEFAULT_OPTIONS",
    "OPTIONS_SCHEMA",
    "SettingsManager",
    "default_settings_path",
    "merge_with_defaults",
    "validate_options",
]
