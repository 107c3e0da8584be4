"""
Types for review statistics and performance analysis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


RecommendedFocus = Literal["accuracy", "speed", "retention"]


@dataclass(frozen=True)
class ReviewStats:
    """
    Corpus-level summary for a collection of items.

    All numeric fields are 0 for an empty collection.
    """
    total_cards: int = 0
    due_for_review: int = 0
    average_memory_strength: float = 0.0
    mastered_cards: int = 0
    learning_cards: int = 0
    avg_accuracy: float = 0.0
    avg_response_time: float = 0.0


@dataclass(frozen=True)
class PerformanceAnalysis:
    weak_patterns: list[str] = field(default_factory=list)
    strong_patterns: list[str] = field(default_factory=list)
    recommended_focus: RecommendedFocus = "accuracy"
    estimated_mastery_days: float = 0.0


@dataclass(frozen=True)
class AnalysisConfig:
    """Thresholds for pattern analysis and mastery-time estimates."""
    weak_pattern_threshold: float = 0.6  # Pattern accuracy below this is weak
    strong_pattern_threshold: float = 0.8  # Pattern accuracy above this is strong
    min_sample_size: int = 3  # Answers needed before a pattern is judged

    slow_response_ms: float = 10000
    fast_response_ms: float = 5000

    avg_reviews_needed: int = 6
    avg_days_per_review: float = 1

    mastery_min_strength: float = 0.9
    mastery_min_reviews: int = 5
    mastery_min_streak: int = 3
