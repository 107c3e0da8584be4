"""
Memory State - Forgetting Curve Estimation

The stored strength only changes when a review happens. Between reviews,
recall decays continuously; this module estimates the current value.

Key concepts:
- Stability (S): EF * (1 + D), in days. Harder, higher-ease items decay slower.
- Retention (R): exp(-Δt / S), Δt = days since last review
- Estimated strength: stored strength * R, clamped to 0-1
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from review_engine.srs.config import EngineConfig
from review_engine.srs.constants import SECONDS_PER_DAY
from review_engine.srs.models import Item


MAX_EXPONENT = 700.0


def days_between(earlier: datetime, later: datetime) -> float:
    """Elapsed time in fractional days (negative if `later` precedes `earlier`)."""
    return (later - earlier).total_seconds() / SECONDS_PER_DAY


def calculate_stability(ease_factor: float, difficulty: float) -> float:
    """
    Memory stability in days.

    Both inputs are clamped to their invariant ranges, so the result is
    always positive and the decay below never divides by zero.
    """
    return max(ease_factor, 1e-9) * (1.0 + max(0.0, min(1.0, difficulty)))


def calculate_retention(days_since_review: float, stability: float) -> float:
    """
    Retention using exponential decay.

    Formula: R = exp(-Δt / S)

    Interpretation:
    - Immediately after review: R = 1.0
    - As time passes: R decays smoothly toward 0
    - Before the review (clock skew, Δt < 0): R > 1; callers clamp the product

    Args:
        days_since_review: Time since last review in days
        stability: Stability in days

    Returns:
        Retention (between 0 and 1 for Δt >= 0)
    """
    # exp() overflows past ~709; anything that large is clamped by callers anyway
    return math.exp(min(-days_since_review / stability, MAX_EXPONENT))


def estimate_strength(item: Item, now: Optional[datetime] = None) -> float:
    """
    Estimate how well an item is remembered at `now`.

    Read-only: the item is not modified and nothing is persisted.

    Args:
        item: Item to estimate
        now: Point in time (defaults to current UTC time)

    Returns:
        Estimated strength between 0 and 1
    """
    if now is None:
        now = datetime.now(timezone.utc)

    memory = item.memory
    stability = calculate_stability(memory.ease_factor, memory.difficulty)
    retention = calculate_retention(days_between(memory.last_reviewed, now), stability)

    return max(0.0, min(1.0, memory.strength * retention))


def is_mastered(item: Item, now: Optional[datetime] = None, config: Optional[EngineConfig] = None) -> bool:
    """
    An item is mastered after enough consecutive successes while its
    estimated strength is still high.
    """
    config = config or EngineConfig()
    return (
        item.memory.review_count >= config.mastery_min_reviews
        and estimate_strength(item, now) > config.mastery_min_strength
    )
