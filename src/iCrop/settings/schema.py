"""Schema helpers for the crop engine settings."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .. import config
from ..errors import SettingsValidationError

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "iCrop/settings.schema.json",
    "type": "object",
    "required": ["schema", "region", "interaction", "view", "export"],
    "properties": {
        "schema": {"const": "iCrop/settings@1"},
        "region": {
            "type": "object",
            "properties": {
                "min_size": {"type": "number", "exclusiveMinimum": 0},
                "new_region_size": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": False,
        },
        "interaction": {
            "type": "object",
            "properties": {
                "handle_size": {"type": "number", "exclusiveMinimum": 0},
                "handle_hit_tolerance": {"type": "number", "exclusiveMinimum": 0},
                "pan_damping": {"type": "number", "exclusiveMinimum": 0, "maximum": 1},
                "redraw_interval_ms": {"type": "integer", "minimum": 0},
            },
            "additionalProperties": False,
        },
        "view": {
            "type": "object",
            "properties": {
                "zoom_in_factor": {"type": "number", "exclusiveMinimum": 1},
                "zoom_out_factor": {"type": "number", "exclusiveMinimum": 0, "exclusiveMaximum": 1},
                "wheel_zoom_factor": {"type": "number", "exclusiveMinimum": 1},
                "min_zoom": {"type": "number", "exclusiveMinimum": 0},
                "max_zoom": {"type": "number", "exclusiveMinimum": 0},
                "rotation_step": {"type": "number"},
            },
            "additionalProperties": False,
        },
        "export": {
            "type": "object",
            "properties": {
                "preview_max_dimension": {"type": "integer", "minimum": 1},
                "preview_min_dimension": {"type": "integer", "minimum": 1},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "iCrop/settings@1",
    "region": {
        "min_size": config.MIN_SIZE,
        "new_region_size": config.NEW_REGION_SIZE,
    },
    "interaction": {
        "handle_size": config.HANDLE_SIZE,
        "handle_hit_tolerance": config.HANDLE_HIT_TOLERANCE,
        "pan_damping": config.PAN_DAMPING,
        "redraw_interval_ms": config.REDRAW_INTERVAL_MS,
    },
    "view": {
        "zoom_in_factor": config.ZOOM_IN_FACTOR,
        "zoom_out_factor": config.ZOOM_OUT_FACTOR,
        "wheel_zoom_factor": config.WHEEL_ZOOM_FACTOR,
        "min_zoom": config.MIN_ZOOM,
        "max_zoom": config.MAX_ZOOM,
        "rotation_step": config.ROTATION_STEP,
    },
    "export": {
        "preview_max_dimension": config.PREVIEW_MAX_DIMENSION,
        "preview_min_dimension": config.PREVIEW_MIN_DIMENSION,
    },
}

_SECTIONS = ("region", "interaction", "view", "export")

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, Mapping):
                merged.setdefault(key, {}).update(value)
                continue
            merged[key] = value
    validate_settings(merged)
    if merged["view"]["min_zoom"] > merged["view"]["max_zoom"]:
        raise SettingsValidationError("view.min_zoom must not exceed view.max_zoom")
    if merged["export"]["preview_min_dimension"] > merged["export"]["preview_max_dimension"]:
        raise SettingsValidationError(
            "export.preview_min_dimension must not exceed export.preview_max_dimension"
        )
    return merged


def validate_settings(data: Mapping[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    try:
        _validator.validate(data)
    except ValidationError as exc:
        path = ".".join(str(part) for part in exc.absolute_path) or "<root>"
        raise SettingsValidationError(f"{path}: {exc.message}") from exc


@dataclass(frozen=True)
class CropSettings:
    """Flattened, validated view of the engine settings."""

    min_size: float = config.MIN_SIZE
    new_region_size: float = config.NEW_REGION_SIZE
    handle_size: float = config.HANDLE_SIZE
    handle_hit_tolerance: float = config.HANDLE_HIT_TOLERANCE
    pan_damping: float = config.PAN_DAMPING
    redraw_interval_ms: int = config.REDRAW_INTERVAL_MS
    zoom_in_factor: float = config.ZOOM_IN_FACTOR
    zoom_out_factor: float = config.ZOOM_OUT_FACTOR
    wheel_zoom_factor: float = config.WHEEL_ZOOM_FACTOR
    min_zoom: float = config.MIN_ZOOM
    max_zoom: float = config.MAX_ZOOM
    rotation_step: float = config.ROTATION_STEP
    preview_max_dimension: int = config.PREVIEW_MAX_DIMENSION
    preview_min_dimension: int = config.PREVIEW_MIN_DIMENSION

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None = None) -> "CropSettings":
        """Build settings from a (partial) nested mapping, filling in defaults."""

        merged = merge_with_defaults(data)
        flat: dict[str, Any] = {}
        for section in _SECTIONS:
            flat.update(merged[section])
        return cls(**flat)


__all__ = [
    "CropSettings",
    "DEFAULT_SETTINGS",
    "SETTINGS_SCHEMA",
    "merge_with_defaults",
    "validate_settings",
]
