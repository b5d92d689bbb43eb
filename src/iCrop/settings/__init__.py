"""Engine settings for the crop interaction stack."""

from .schema import (
    DEFAULT_SETTINGS,
    SETTINGS_SCHEMA,
    CropSettings,
    merge_with_defaults,
    validate_settings,
)

__all__ = [
    "CropSettings",
    "DEFAULT_SETTINGS",
    "SETTINGS_SCHEMA",
    "merge_with_defaults",
    "validate_settings",
]
