import logging
from datetime import datetime, timedelta, timezone

import pytest

from review_engine.srs import (
    EngineConfig,
    Item,
    ItemContent,
    MemoryState,
    Performance,
    ReviewDifficulty,
    ReviewOutcome,
)


NOW = datetime(2025, 8, 28, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def engine_logs(caplog):
    """Capture package records; the package logger does not propagate to root."""
    logger = logging.getLogger("review_engine")
    previous_level = logger.level
    logger.addHandler(caplog.handler)
    logger.setLevel(logging.DEBUG)
    yield caplog
    logger.removeHandler(caplog.handler)
    logger.setLevel(previous_level)


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def content():
    return ItemContent(front="안녕하세요", back="Hello", level=1, stage=2, pattern="greeting")


@pytest.fixture
def make_item(content):
    def _make(
        item_id="1-2-0",
        strength=0.8,
        ease_factor=2.5,
        interval=6,
        review_count=2,
        last_reviewed=NOW - timedelta(days=6),
        next_review=NOW,
        difficulty=0.5,
        accuracy=(),
        response_time=(),
        streak=0,
        mistakes=0,
        pattern="greeting",
    ):
        return Item(
            item_id=item_id,
            content=ItemContent(content.front, content.back, content.level, content.stage, pattern),
            memory=MemoryState(
                strength=strength,
                ease_factor=ease_factor,
                interval=interval,
                review_count=review_count,
                last_reviewed=last_reviewed,
                next_review=next_review,
                difficulty=difficulty,
            ),
            performance=Performance(
                accuracy=tuple(accuracy),
                response_time=tuple(response_time),
                streak=streak,
                mistakes=mistakes,
            ),
        )
    return _make


@pytest.fixture
def make_outcome():
    def _make(
        is_correct=True,
        response_time=1500,
        difficulty=ReviewDifficulty.EASY,
        confidence=1.0,
        item_id="1-2-0",
    ):
        return ReviewOutcome(
            item_id=item_id,
            user_answer="Hello" if is_correct else "Goodbye",
            correct_answer="Hello",
            is_correct=is_correct,
            response_time=response_time,
            difficulty=difficulty,
            confidence=confidence,
            timestamp=NOW,
        )
    return _make
