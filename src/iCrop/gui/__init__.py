"""Qt-facing interaction layer for the crop engine."""
