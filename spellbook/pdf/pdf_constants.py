"""Shared constants for markup parsing and page layout."""

from __future__ import annotations

import os

BULLET_GLYPH = "•"
BULLET_MARKERS = ("-", BULLET_GLYPH)
BULLET_PREFIX = f"{BULLET_GLYPH} "
# Baseline offset above the bottom of a line band, as a fraction of font size.
DESCENT_RATIO = 0.22
EPSILON = 1e-4
DEBUG_PAGINATION = os.getenv("DEBUG_PAGINATION", "0") not in {
    "",
    "0",
    "false",
    "False",
}
