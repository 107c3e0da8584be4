"""
Constants for analytics frames.
"""

from __future__ import annotations

from typing import Final


UNKNOWN_PATTERN: Final[str] = "unknown"

ITEM_FRAME_COLUMNS: Final[list[str]] = [
    "item_id",
    "pattern",
    "review_count",
    "streak",
    "strength",
    "estimated_strength",
    "is_due",
    "recent_accuracy",
    "recent_response_time",
]

PATTERN_FRAME_COLUMNS: Final[list[str]] = ["pattern", "correct", "total"]
