"""
Scheduler - SM-2 Variant Memory Updates

Pure scheduling logic (no storage, no network calls).

Main workflow:
1. Caller loads an item (or creates one with create_item)
2. Caller builds a ReviewOutcome for the learner's answer
3. process_review() grades it and returns a NEW item
4. Caller persists the returned item

Concurrent answers for the same item must be serialized by the caller
(load -> process_review -> save); this module holds no state between calls.
"""

from __future__ import annotations

import math
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from review_engine.logging_utils import get_logger
from review_engine.srs.config import EngineConfig
from review_engine.srs.constants import INITIAL_DIFFICULTY, MINUTES_PER_DAY
from review_engine.srs.memory_state import is_mastered
from review_engine.srs.models import (
    Item,
    ItemContent,
    MemoryState,
    Performance,
    ReviewOutcome,
    append_bounded,
)
from review_engine.srs.quality import evaluate_quality

LOG = get_logger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ---- Item Creation ----

def create_item(
    content: ItemContent,
    config: Optional[EngineConfig] = None,
    item_id: Optional[str] = None,
    now: Optional[datetime] = None
) -> Item:
    """
    Initialize state for a new item (never reviewed).

    The first review is due one learning step after creation.

    Args:
        content: What is being studied
        config: Engine parameters (defaults to EngineConfig())
        item_id: Caller-supplied identity; defaults to "{level}-{stage}-{epoch_ms}"
        now: Creation time (defaults to current UTC time)

    Returns:
        New Item with default memory and empty performance history
    """
    config = config or EngineConfig()
    if now is None:
        now = datetime.now(timezone.utc)
    if item_id is None:
        item_id = f"{content.level}-{content.stage}-{int(now.timestamp() * 1000)}"

    item = Item(
        item_id=item_id,
        content=content,
        memory=MemoryState(
            strength=config.initial_memory_strength,
            ease_factor=config.initial_ease_factor,
            interval=0,
            review_count=0,
            last_reviewed=now,
            next_review=now + timedelta(minutes=config.learning_steps[0]),
            difficulty=INITIAL_DIFFICULTY,
        ),
        performance=Performance(),
    )

    LOG.debug("item_created", extra={"item_id": item_id, "next_review": item.memory.next_review.isoformat()})
    return item


# ---- Performance History ----

def update_performance(
    performance: Performance,
    outcome: ReviewOutcome,
    capacity: int
) -> Performance:
    """
    Record one answer in the bounded history.

    Correct answers extend the streak; incorrect ones reset it and count
    as a lifetime mistake.
    """
    accuracy = append_bounded(performance.accuracy, 1 if outcome.is_correct else 0, capacity)
    response_time = append_bounded(performance.response_time, outcome.response_time, capacity)

    if outcome.is_correct:
        return replace(
            performance,
            accuracy=accuracy,
            response_time=response_time,
            streak=performance.streak + 1,
        )

    return replace(
        performance,
        accuracy=accuracy,
        response_time=response_time,
        streak=0,
        mistakes=performance.mistakes + 1,
    )


# ---- Memory Update ----

def update_ease_factor(ease_factor: float, quality: float, config: EngineConfig) -> float:
    """
    SM-2 ease update after a passing review.

    Formula:
        EF' = EF + (a - (5 - q) * (b + (5 - q) * c))

    With the defaults a=0.1, b=0.08, c=0.02: q=5 adds 0.1, q=4 leaves EF
    unchanged, q=3 subtracts 0.14.
    """
    gap = 5 - quality
    delta = config.ease_coefficient_a - gap * (config.ease_coefficient_b + gap * config.ease_coefficient_c)
    return _clamp(ease_factor + delta, config.min_ease_factor, config.max_ease_factor)


def next_interval(memory: MemoryState, passed: bool, config: EngineConfig) -> float:
    """
    Interval in days for the next review, clamped to the configured bounds.

    Success:
        first success   -> graduating interval
        second success  -> fixed second-step interval (6 days)
        later successes -> round(previous interval * EF)
    Failure:
        first learning step, converted from minutes to days
    """
    if passed:
        if memory.review_count == 0:
            interval = config.graduating_interval
        elif memory.review_count == 1:
            interval = config.second_step_interval
        else:
            interval = _round_half_up(memory.interval * memory.ease_factor)
    else:
        interval = config.learning_steps[0] / MINUTES_PER_DAY

    return _clamp(interval, config.min_interval, config.max_interval)


def smooth_difficulty(difficulty: float, outcome: ReviewOutcome, config: EngineConfig) -> float:
    """Exponential smoothing toward the weight of the self-reported difficulty."""
    key = getattr(outcome.difficulty, "value", outcome.difficulty)
    weight = dict(config.session_difficulty_weight).get(key, INITIAL_DIFFICULTY)
    retain = config.difficulty_retain
    return _clamp(difficulty * retain + weight * (1 - retain), 0.0, 1.0)


def calculate_memory_update(
    memory: MemoryState,
    outcome: ReviewOutcome,
    quality: float,
    now: datetime,
    config: EngineConfig
) -> MemoryState:
    """
    Compute the new memory state for a graded review.

    Args:
        memory: State before the review
        outcome: The learner's answer
        quality: Grade from evaluate_quality()
        now: Review time
        config: Engine parameters

    Returns:
        New MemoryState (input unchanged)
    """
    passed = quality >= config.passing_grade
    interval = next_interval(memory, passed, config)

    if passed:
        review_count = memory.review_count + 1
        ease_factor = update_ease_factor(memory.ease_factor, quality, config)
        strength = memory.strength + config.strength_gain_base + (quality - 3) * config.strength_gain_per_quality
    else:
        review_count = 0
        ease_factor = _clamp(
            memory.ease_factor - config.ease_penalty,
            config.min_ease_factor,
            config.max_ease_factor,
        )
        strength = memory.strength - config.strength_penalty

    return MemoryState(
        strength=_clamp(strength, 0.0, 1.0),
        ease_factor=ease_factor,
        interval=interval,
        review_count=review_count,
        last_reviewed=now,
        next_review=now + timedelta(days=interval),
        difficulty=smooth_difficulty(memory.difficulty, outcome, config),
    )


def process_review(
    item: Item,
    outcome: ReviewOutcome,
    config: Optional[EngineConfig] = None,
    now: Optional[datetime] = None
) -> Item:
    """
    Apply one review to an item.

    This is the core scheduling algorithm. It never raises on well-typed
    input and never mutates `item`; all outputs are clamped into range.

    Args:
        item: Current item state
        outcome: The learner's answer
        config: Engine parameters (defaults to EngineConfig())
        now: Review time (defaults to current UTC time)

    Returns:
        Updated Item
    """
    config = config or EngineConfig()
    if now is None:
        now = datetime.now(timezone.utc)

    quality = evaluate_quality(outcome, config)
    performance = update_performance(item.performance, outcome, config.history_capacity)
    memory = calculate_memory_update(item.memory, outcome, quality, now, config)

    updated = replace(item, memory=memory, performance=performance)

    LOG.debug("item_reviewed", extra={
        "item_id": item.item_id,
        "quality": quality,
        "interval": memory.interval,
        "ease_factor": memory.ease_factor,
        "review_count": memory.review_count,
    })
    if is_mastered(updated, now, config) and not is_mastered(item, now, config):
        LOG.info("item_mastered", extra={"item_id": item.item_id, "review_count": memory.review_count})

    return updated


def preview_next_review(
    item: Item,
    outcome: ReviewOutcome,
    config: Optional[EngineConfig] = None,
    now: Optional[datetime] = None
) -> datetime:
    """
    When the item would next be due if `outcome` were applied at `now`.

    Same rules as process_review(), without building the updated item.
    """
    config = config or EngineConfig()
    if now is None:
        now = datetime.now(timezone.utc)

    quality = evaluate_quality(outcome, config)
    interval = next_interval(item.memory, quality >= config.passing_grade, config)
    return now + timedelta(days=interval)
