"""
Pydantic models for serialized items and review payloads.

The engine itself does no I/O. These models let storage and HTTP
collaborators turn engine values into plain documents and back, and
validate untrusted review submissions before they reach the scheduler.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from review_engine.srs.constants import HISTORY_CAPACITY, ReviewDifficulty
from review_engine.srs.models import (
    Item,
    ItemContent,
    MemoryState,
    Performance,
    ReviewOutcome,
)


# ---- Item Documents ----

class ContentDocument(BaseModel):
    """Study content as stored by the content catalog."""
    front: str
    back: str
    level: int
    stage: int
    pattern: Optional[str] = None


class MemoryDocument(BaseModel):
    strength: float = Field(..., ge=0, le=1)
    ease_factor: float = Field(..., gt=0)
    interval: float = Field(..., ge=0, description="Days until next review")
    review_count: int = Field(..., ge=0)
    last_reviewed: datetime
    next_review: datetime
    difficulty: float = Field(..., ge=0, le=1)


class PerformanceDocument(BaseModel):
    accuracy: list[int] = Field(default_factory=list)
    response_time: list[float] = Field(default_factory=list, description="Latencies in ms")
    streak: int = Field(0, ge=0)
    mistakes: int = Field(0, ge=0)

    @field_validator("accuracy", "response_time")
    @classmethod
    def keep_recent(cls, v: list) -> list:
        """Older stores may hold longer histories; keep only the newest entries."""
        return v[-HISTORY_CAPACITY:]


class ItemDocument(BaseModel):
    """Full item state, ready for a document store."""
    item_id: str
    content: ContentDocument
    memory: MemoryDocument
    performance: PerformanceDocument = Field(default_factory=PerformanceDocument)

    @classmethod
    def from_item(cls, item: Item) -> ItemDocument:
        return cls(
            item_id=item.item_id,
            content=ContentDocument(
                front=item.content.front,
                back=item.content.back,
                level=item.content.level,
                stage=item.content.stage,
                pattern=item.content.pattern,
            ),
            memory=MemoryDocument(
                strength=item.memory.strength,
                ease_factor=item.memory.ease_factor,
                interval=item.memory.interval,
                review_count=item.memory.review_count,
                last_reviewed=item.memory.last_reviewed,
                next_review=item.memory.next_review,
                difficulty=item.memory.difficulty,
            ),
            performance=PerformanceDocument(
                accuracy=list(item.performance.accuracy),
                response_time=list(item.performance.response_time),
                streak=item.performance.streak,
                mistakes=item.performance.mistakes,
            ),
        )

    def to_item(self) -> Item:
        return Item(
            item_id=self.item_id,
            content=ItemContent(**self.content.model_dump()),
            memory=MemoryState(**self.memory.model_dump()),
            performance=Performance(
                accuracy=tuple(self.performance.accuracy),
                response_time=tuple(self.performance.response_time),
                streak=self.performance.streak,
                mistakes=self.performance.mistakes,
            ),
        )


# ---- Review Payloads ----

class ReviewOutcomePayload(BaseModel):
    """An answer submission as received from a client."""
    item_id: str
    user_answer: str = ""
    correct_answer: str = ""
    is_correct: bool
    response_time: float = Field(..., ge=0, description="Milliseconds")
    difficulty: ReviewDifficulty = ReviewDifficulty.MEDIUM
    confidence: float = Field(0.5, ge=0, le=1)
    timestamp: datetime

    def to_outcome(self) -> ReviewOutcome:
        return ReviewOutcome(
            item_id=self.item_id,
            user_answer=self.user_answer,
            correct_answer=self.correct_answer,
            is_correct=self.is_correct,
            response_time=self.response_time,
            difficulty=self.difficulty,
            confidence=self.confidence,
            timestamp=self.timestamp,
        )
