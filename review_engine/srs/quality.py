"""
Quality Evaluator

Converts one review outcome into an SM-2 quality grade on the 0-5 scale.

Formula:
    q = base + time_bonus + difficulty_bonus + confidence * w
    q = clamp(q, 0, 5)

Where:
- base = 3 if correct else 0
- time_bonus: +1 (<= 2s), +0.5 (<= 5s), -0.5 (>= 10s), else 0
- difficulty_bonus: easy +1, medium +0.5, hard 0
- w = 0.5

Every input produces a defined grade; nothing here raises.
"""

from __future__ import annotations

from typing import Optional, Union

from review_engine.srs.config import EngineConfig
from review_engine.srs.constants import ReviewDifficulty
from review_engine.srs.models import ReviewOutcome


MIN_QUALITY = 0.0
MAX_QUALITY = 5.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def time_bonus(response_time_ms: float, config: EngineConfig) -> float:
    """Latency adjustment: fast answers earn credit, very slow ones lose some."""
    if response_time_ms <= config.fast_response_ms:
        return config.fast_response_bonus
    if response_time_ms <= config.normal_response_ms:
        return config.normal_response_bonus
    if response_time_ms >= config.slow_response_ms:
        return -config.slow_response_penalty
    return 0.0


def difficulty_bonus(difficulty: Union[ReviewDifficulty, str], config: EngineConfig) -> float:
    """Self-reported difficulty adjustment; unknown labels contribute 0."""
    key = getattr(difficulty, "value", difficulty)
    return dict(config.difficulty_bonus).get(key, 0.0)


def evaluate_quality(outcome: ReviewOutcome, config: Optional[EngineConfig] = None) -> float:
    """
    Grade a review outcome.

    Args:
        outcome: The learner's answer
        config: Engine parameters (defaults to EngineConfig())

    Returns:
        Quality between 0 and 5
    """
    config = config or EngineConfig()

    quality = config.correct_base_quality if outcome.is_correct else 0.0
    quality += time_bonus(outcome.response_time, config)
    quality += difficulty_bonus(outcome.difficulty, config)

    # Confidence outside 0-1 saturates rather than dominating the grade
    quality += _clamp(outcome.confidence, 0.0, 1.0) * config.confidence_weight

    return _clamp(quality, MIN_QUALITY, MAX_QUALITY)
