"""
SRS - Spaced Repetition Scheduling

Main API for the review scheduling engine.

This package implements an SM-2 variant with:
- Quality grading from correctness, latency, difficulty and confidence
- Ease factor / interval scheduling with configurable bounds
- Exponential forgetting curve: R = exp(-Δt/S), S = EF * (1 + D)
- Deterministic due-item ordering

Everything here is a pure function of its arguments: no storage, no clock
unless `now` is omitted, no state kept between calls.

Quick start:
    from review_engine import srs

    item = srs.create_item(content, now=now)
    item = srs.process_review(item, outcome, now=now)
    queue = srs.select_due_items(items, now)
"""

# Core scheduler API
from review_engine.srs.scheduler import (
    create_item,
    process_review,
    preview_next_review,
)

# Configuration
from review_engine.srs.config import (
    EngineConfig,
    LEVEL_PRESETS,
    PATTERN_PRESETS,
    adapt_config_for_performance,
    config_for_level,
    config_for_pattern,
)

# Constants
from review_engine.srs.constants import (
    ReviewDifficulty,
    HISTORY_CAPACITY,
    STATS_WINDOW,
)

# Value types
from review_engine.srs.models import (
    Item,
    ItemContent,
    MemoryState,
    Performance,
    ReviewOutcome,
)

# Grading, forgetting curve and selection
from review_engine.srs.quality import evaluate_quality
from review_engine.srs.memory_state import estimate_strength, is_mastered
from review_engine.srs.selection import select_due_items

# Serialization
from review_engine.srs.schemas import ItemDocument, ReviewOutcomePayload


__all__ = [
    # Core algorithm
    "create_item",
    "process_review",
    "preview_next_review",

    # Configuration
    "EngineConfig",
    "LEVEL_PRESETS",
    "PATTERN_PRESETS",
    "adapt_config_for_performance",
    "config_for_level",
    "config_for_pattern",

    # Enums and constants
    "ReviewDifficulty",
    "HISTORY_CAPACITY",
    "STATS_WINDOW",

    # Value types
    "Item",
    "ItemContent",
    "MemoryState",
    "Performance",
    "ReviewOutcome",

    # Estimation and selection
    "evaluate_quality",
    "estimate_strength",
    "is_mastered",
    "select_due_items",

    # Schemas
    "ItemDocument",
    "ReviewOutcomePayload",
]
