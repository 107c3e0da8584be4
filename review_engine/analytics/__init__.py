"""
Analytics package exports.
"""

from review_engine.analytics.service import analyze_performance, build_review_stats
from review_engine.analytics.types import (
    AnalysisConfig,
    PerformanceAnalysis,
    RecommendedFocus,
    ReviewStats,
)

__all__ = [
    "analyze_performance",
    "build_review_stats",
    "AnalysisConfig",
    "PerformanceAnalysis",
    "RecommendedFocus",
    "ReviewStats",
]
