"""
Metric computations over item collections.

Items are flattened into dataframes once; every metric is a small
function over those frames. All functions are safe on empty frames.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

import pandas as pd

from review_engine.analytics.constants import (
    ITEM_FRAME_COLUMNS,
    PATTERN_FRAME_COLUMNS,
    UNKNOWN_PATTERN,
)
from review_engine.srs.config import EngineConfig
from review_engine.srs.memory_state import estimate_strength
from review_engine.srs.models import Item


def recent_mean(history: Sequence[float], window: int) -> float:
    """
    Mean of the last `window` entries; an empty history counts as 0.
    """
    recent = list(history)[-window:]
    if not recent:
        return 0.0
    return sum(recent) / len(recent)


def build_item_frame(
    items: Iterable[Item],
    now: datetime,
    window: int
) -> pd.DataFrame:
    """
    One row per item with the values the metrics below need.
    """
    rows = [
        {
            "item_id": item.item_id,
            "pattern": item.content.pattern or UNKNOWN_PATTERN,
            "review_count": item.memory.review_count,
            "streak": item.performance.streak,
            "strength": item.memory.strength,
            "estimated_strength": estimate_strength(item, now),
            "is_due": item.memory.next_review <= now,
            "recent_accuracy": recent_mean(item.performance.accuracy, window),
            "recent_response_time": recent_mean(item.performance.response_time, window),
        }
        for item in items
    ]
    if not rows:
        return pd.DataFrame(columns=ITEM_FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=ITEM_FRAME_COLUMNS)


def build_pattern_frame(items: Iterable[Item], window: int) -> pd.DataFrame:
    """
    Correct/total answer counts per content pattern over each item's recent window.
    """
    rows = []
    for item in items:
        recent = list(item.performance.accuracy)[-window:]
        rows.append({
            "pattern": item.content.pattern or UNKNOWN_PATTERN,
            "correct": sum(recent),
            "total": len(recent),
        })
    if not rows:
        return pd.DataFrame(columns=PATTERN_FRAME_COLUMNS)

    df = pd.DataFrame(rows, columns=PATTERN_FRAME_COLUMNS)
    return df.groupby("pattern", as_index=False)[["correct", "total"]].sum()


def safe_mean(series: pd.Series) -> float:
    """Mean that resolves to 0 for an empty series instead of NaN."""
    if series.empty:
        return 0.0
    return float(series.mean())


def count_due(items_df: pd.DataFrame) -> int:
    if items_df.empty:
        return 0
    return int(items_df["is_due"].astype(bool).sum())


def count_mastered(items_df: pd.DataFrame, config: EngineConfig) -> int:
    """
    Mastered: enough consecutive successes and estimated strength still high.
    """
    if items_df.empty:
        return 0
    mask = (
        (items_df["review_count"] >= config.mastery_min_reviews)
        & (items_df["estimated_strength"] > config.mastery_min_strength)
    )
    return int(mask.sum())


def count_learning(items_df: pd.DataFrame, config: EngineConfig) -> int:
    if items_df.empty:
        return 0
    return int((items_df["review_count"] < config.learning_max_reviews).sum())


def patterns_by_accuracy(
    pattern_df: pd.DataFrame,
    min_sample_size: int,
    threshold: float,
    above: bool
) -> list[str]:
    """
    Patterns with enough answers whose accuracy is strictly above (or below) threshold.
    """
    if pattern_df.empty:
        return []

    sampled = pattern_df[pattern_df["total"] >= min_sample_size]
    if sampled.empty:
        return []

    accuracy = sampled["correct"] / sampled["total"]
    mask = accuracy > threshold if above else accuracy < threshold
    return sorted(sampled.loc[mask, "pattern"].tolist())
