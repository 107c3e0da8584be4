"""
Item Model - Value Types for Reviewable Items

Pure data, no scheduling behavior. Every type is a frozen dataclass:
the engine never mutates an item, it builds a new one with
dataclasses.replace().

Structure:
- ItemContent: what is studied (owned by the content catalog, opaque here)
- MemoryState: SM-2 state plus stored strength and smoothed difficulty
- Performance: bounded answer history, streak and lifetime mistakes
- Item: content + memory + performance
- ReviewOutcome: one learner answer, consumed by process_review()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from review_engine.srs.constants import HISTORY_CAPACITY, ReviewDifficulty


@dataclass(frozen=True)
class ItemContent:
    """Front/back text plus curriculum placement. Never inspected by the scheduler."""
    front: str
    back: str
    level: int
    stage: int
    pattern: Optional[str] = None


@dataclass(frozen=True)
class MemoryState:
    strength: float  # 0-1, stored recall confidence (updated at review time only)
    ease_factor: float  # SM-2 EF, within config bounds
    interval: float  # Days until next review
    review_count: int  # Consecutive successful reviews since last lapse
    last_reviewed: datetime
    next_review: datetime
    difficulty: float  # 0-1, exponentially smoothed subjective difficulty


@dataclass(frozen=True)
class Performance:
    accuracy: tuple[int, ...] = ()  # 1 = correct, 0 = incorrect; most recent last
    response_time: tuple[float, ...] = ()  # Latencies in ms; most recent last
    streak: int = 0
    mistakes: int = 0


@dataclass(frozen=True)
class Item:
    item_id: str
    content: ItemContent
    memory: MemoryState
    performance: Performance = field(default_factory=Performance)


@dataclass(frozen=True)
class ReviewOutcome:
    """
    Result of a single answer.

    The engine does not check that item_id matches the item being updated;
    that correspondence is the caller's responsibility.
    """
    item_id: str
    user_answer: str
    correct_answer: str
    is_correct: bool
    response_time: float  # ms
    difficulty: ReviewDifficulty
    confidence: float  # 0-1
    timestamp: datetime


def append_bounded(history: tuple, value, capacity: int = HISTORY_CAPACITY) -> tuple:
    """
    Append to a history tuple, dropping the oldest entries beyond capacity.

    Args:
        history: Existing entries, most recent last
        value: New entry
        capacity: Maximum number of entries to keep

    Returns:
        New tuple of at most `capacity` entries
    """
    return (tuple(history) + (value,))[-capacity:]
