"""
SRSEngine - one config, every engine operation.

Convenience facade for callers that want to construct the engine once
and call methods, instead of threading an EngineConfig through the
module-level functions. Holds no item state.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from review_engine.analytics import (
    AnalysisConfig,
    PerformanceAnalysis,
    ReviewStats,
    analyze_performance,
    build_review_stats,
)
from review_engine.srs import memory_state, quality, scheduler, selection
from review_engine.srs.config import EngineConfig
from review_engine.srs.models import Item, ItemContent, ReviewOutcome


class SRSEngine:

    def __init__(self, config: Optional[EngineConfig] = None, analysis_config: Optional[AnalysisConfig] = None):
        self.config = config or EngineConfig()
        self.analysis_config = analysis_config or AnalysisConfig()

    def with_overrides(self, **changes) -> SRSEngine:
        """New engine with some config fields replaced; this one is unchanged."""
        return SRSEngine(self.config.with_overrides(**changes), self.analysis_config)

    def create_item(self, content: ItemContent, item_id: Optional[str] = None, now: Optional[datetime] = None) -> Item:
        return scheduler.create_item(content, self.config, item_id=item_id, now=now)

    def evaluate_quality(self, outcome: ReviewOutcome) -> float:
        return quality.evaluate_quality(outcome, self.config)

    def update_item(self, item: Item, outcome: ReviewOutcome, now: Optional[datetime] = None) -> Item:
        return scheduler.process_review(item, outcome, self.config, now=now)

    def preview_next_review(self, item: Item, outcome: ReviewOutcome, now: Optional[datetime] = None) -> datetime:
        return scheduler.preview_next_review(item, outcome, self.config, now=now)

    def estimate_strength(self, item: Item, now: Optional[datetime] = None) -> float:
        return memory_state.estimate_strength(item, now)

    def is_mastered(self, item: Item, now: Optional[datetime] = None) -> bool:
        return memory_state.is_mastered(item, now, self.config)

    def select_due(self, items: Iterable[Item], now: Optional[datetime] = None) -> list[Item]:
        return selection.select_due_items(items, now)

    def calculate_stats(self, items: Iterable[Item], now: Optional[datetime] = None) -> ReviewStats:
        return build_review_stats(items, now, self.config)

    def analyze_performance(self, items: Iterable[Item]) -> PerformanceAnalysis:
        return analyze_performance(items, self.analysis_config)
