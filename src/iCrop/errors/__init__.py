"""Custom exception hierarchy for iCrop."""

from __future__ import annotations


class ICropError(Exception):
    """Base class for all custom errors raised by iCrop."""


# --- Geometry ---

class InvalidGeometryError(ICropError):
    """Raised when a crop rectangle or pointer delta is degenerate.

    The interaction controller recovers from this locally; it never reaches
    the caller of a pointer handler.
    """


# --- Export ---

class RenderUnavailableError(ICropError):
    """Raised when a crop cannot be rendered (no source, no region, no surface)."""


# --- Commands ---

class UnsupportedAspectRatioError(ICropError):
    """Raised when an aspect ratio name is not one of the known presets."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported aspect ratio: {name!r}")
        self.name = name


# --- Settings ---

class SettingsError(ICropError):
    """Base class for settings related failures."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "ICropError",
    "InvalidGeometryError",
    "RenderUnavailableError",
    "SettingsError",
    "SettingsValidationError",
    "UnsupportedAspectRatioError",
]
