"""
Due-Item Selection

Builds the review queue: items whose next review has passed, ordered so
the most at-risk items come first.

Priority order (each level only breaks ties left by the previous one):
1. Lowest estimated strength first, when strengths differ by > 0.1
2. Earliest next_review first, when they differ by > 1 minute
3. Highest stored difficulty first

The same items and `now` always produce the same order.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Iterable, Optional

from review_engine.logging_utils import get_logger
from review_engine.srs.memory_state import estimate_strength
from review_engine.srs.models import Item

LOG = get_logger(__name__)


STRENGTH_TOLERANCE = 0.1
NEXT_REVIEW_TOLERANCE_SECONDS = 60.0


def is_due(item: Item, now: datetime) -> bool:
    return item.memory.next_review <= now


def _compare(a: tuple[float, Item], b: tuple[float, Item]) -> int:
    strength_a, item_a = a
    strength_b, item_b = b

    strength_diff = strength_a - strength_b
    if abs(strength_diff) > STRENGTH_TOLERANCE:
        return -1 if strength_diff < 0 else 1

    time_diff = (item_a.memory.next_review - item_b.memory.next_review).total_seconds()
    if abs(time_diff) > NEXT_REVIEW_TOLERANCE_SECONDS:
        return -1 if time_diff < 0 else 1

    difficulty_diff = item_b.memory.difficulty - item_a.memory.difficulty
    if difficulty_diff == 0:
        return 0
    return -1 if difficulty_diff < 0 else 1


def select_due_items(items: Iterable[Item], now: Optional[datetime] = None) -> list[Item]:
    """
    Filter items to those due at `now` and order them by review priority.

    Args:
        items: Candidate items (not modified)
        now: Point in time (defaults to current UTC time)

    Returns:
        Due items, highest priority first
    """
    if now is None:
        now = datetime.now(timezone.utc)

    # Strength is estimated once per item, at the same `now` used for filtering
    scored = [(estimate_strength(item, now), item) for item in items if is_due(item, now)]
    scored.sort(key=cmp_to_key(_compare))

    LOG.debug("due_items_selected", extra={"due_count": len(scored)})
    return [item for _, item in scored]
