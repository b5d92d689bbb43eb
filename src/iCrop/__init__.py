"""Interactive crop-region engine for zoomed and rotated image views."""

__all__ = ["__version__"]

__version__ = "0.1.0"
