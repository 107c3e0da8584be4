"""
Service layer to assemble review statistics and performance analysis.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from review_engine.analytics.metrics import (
    build_item_frame,
    build_pattern_frame,
    count_due,
    count_learning,
    count_mastered,
    patterns_by_accuracy,
    recent_mean,
    safe_mean,
)
from review_engine.analytics.types import AnalysisConfig, PerformanceAnalysis, ReviewStats
from review_engine.logging_utils import get_logger
from review_engine.srs.config import EngineConfig
from review_engine.srs.constants import ANALYSIS_WINDOW
from review_engine.srs.models import Item

LOG = get_logger(__name__)


def build_review_stats(
    items: Iterable[Item],
    now: Optional[datetime] = None,
    config: Optional[EngineConfig] = None
) -> ReviewStats:
    """
    Summarize a collection of items. Read-only.

    Accuracy and response time are averaged per item over its last
    `stats_window` answers (an empty history counts as 0), then averaged
    across items.
    """
    config = config or EngineConfig()
    if now is None:
        now = datetime.now(timezone.utc)

    items_df = build_item_frame(items, now, config.stats_window)
    if items_df.empty:
        return ReviewStats()

    stats = ReviewStats(
        total_cards=len(items_df),
        due_for_review=count_due(items_df),
        average_memory_strength=safe_mean(items_df["estimated_strength"]),
        mastered_cards=count_mastered(items_df, config),
        learning_cards=count_learning(items_df, config),
        avg_accuracy=safe_mean(items_df["recent_accuracy"]),
        avg_response_time=safe_mean(items_df["recent_response_time"]),
    )
    LOG.debug("review_stats_built", extra={"total_cards": stats.total_cards, "due_for_review": stats.due_for_review})
    return stats


def _is_mastered_for_analysis(item: Item, config: AnalysisConfig) -> bool:
    return (
        item.memory.strength > config.mastery_min_strength
        and item.memory.review_count >= config.mastery_min_reviews
        and item.performance.streak >= config.mastery_min_streak
    )


def analyze_performance(
    items: Iterable[Item],
    analysis_config: Optional[AnalysisConfig] = None
) -> PerformanceAnalysis:
    """
    Find weak and strong content patterns and suggest what to practise.

    Focus is "speed" when answers are accurate but slow, "retention" when
    they are accurate and fast, otherwise "accuracy".
    """
    config = analysis_config or AnalysisConfig()
    items = list(items)
    if not items:
        return PerformanceAnalysis()

    pattern_df = build_pattern_frame(items, ANALYSIS_WINDOW)
    weak = patterns_by_accuracy(pattern_df, config.min_sample_size, config.weak_pattern_threshold, above=False)
    strong = patterns_by_accuracy(pattern_df, config.min_sample_size, config.strong_pattern_threshold, above=True)

    avg_accuracy = sum(recent_mean(i.performance.accuracy, ANALYSIS_WINDOW) for i in items) / len(items)
    avg_response_time = sum(recent_mean(i.performance.response_time, ANALYSIS_WINDOW) for i in items) / len(items)

    focus = "accuracy"
    if avg_accuracy > config.strong_pattern_threshold and avg_response_time > config.slow_response_ms:
        focus = "speed"
    elif avg_accuracy > config.strong_pattern_threshold and avg_response_time < config.fast_response_ms:
        focus = "retention"

    unmastered = sum(1 for i in items if not _is_mastered_for_analysis(i, config))

    return PerformanceAnalysis(
        weak_patterns=weak,
        strong_patterns=strong,
        recommended_focus=focus,
        estimated_mastery_days=unmastered * config.avg_reviews_needed * config.avg_days_per_review,
    )
