"""Animation constants shared by the engine, codec and CLI."""

from __future__ import annotations

# Layout
DEFAULT_CANVAS_RADIUS = 200.0
DEFAULT_GRID_SCALE = 200.0

# Sampling
DEFAULT_BEATS_PER_FRAME = 0.25

# File processing
PNG_SIGNATURE = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])
METADATA_KEYWORD = "metadata"
SEQUENCE_KEY = "sequence"

# Validation
MIN_SEQUENCE_STEPS = 1
MAX_SEQUENCE_STEPS = 1000
