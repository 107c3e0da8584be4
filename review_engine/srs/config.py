"""
Engine Configuration

All tunable parameters for the SM-2 variant in one immutable object.

The defaults reproduce the production engine. Several coefficients
(ease update 0.1/0.08/0.02, the 0.2 strength penalty, the 2s/5s/10s
latency thresholds) have no documented derivation; they are kept as
named defaults so they can be overridden rather than re-derived.

Usage:
    from review_engine.srs.config import EngineConfig, config_for_level

    config = EngineConfig()                       # defaults
    config = EngineConfig.from_env()              # SRS_* env overrides
    config = config_for_level(4)                  # level preset
    config = config.with_overrides(max_interval=90)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from dotenv import load_dotenv

from review_engine.srs.constants import HISTORY_CAPACITY, STATS_WINDOW


@dataclass(frozen=True)
class EngineConfig:
    # ---- SM-2 ease factor ----
    min_ease_factor: float = 1.3
    max_ease_factor: float = 3.5
    initial_ease_factor: float = 2.5
    ease_bonus: float = 0.1
    ease_penalty: float = 0.2

    # ---- Intervals (days, learning steps in minutes) ----
    min_interval: float = 1
    max_interval: float = 36500  # ~100 years
    learning_steps: tuple[float, ...] = (1, 10)
    graduating_interval: float = 1
    easy_interval: float = 4
    second_step_interval: float = 6  # reviewCount == 1 -> fixed 6 days

    # ---- Memory model ----
    initial_memory_strength: float = 0.8
    memory_decay_rate: float = 0.05
    difficulty_weight: float = 0.3
    time_weight: float = 0.2

    # ---- Quality thresholds ----
    passing_grade: float = 3
    easy_grade: float = 4

    # ---- Quality grading ----
    correct_base_quality: float = 3
    fast_response_ms: int = 2000
    fast_response_bonus: float = 1.0
    normal_response_ms: int = 5000
    normal_response_bonus: float = 0.5
    slow_response_ms: int = 10000
    slow_response_penalty: float = 0.5
    difficulty_bonus: tuple[tuple[str, float], ...] = (("easy", 1.0), ("medium", 0.5), ("hard", 0.0))
    confidence_weight: float = 0.5

    # ---- Ease update: EF += a - (5 - q) * (b + (5 - q) * c) ----
    ease_coefficient_a: float = 0.1
    ease_coefficient_b: float = 0.08
    ease_coefficient_c: float = 0.02

    # ---- Strength update ----
    strength_gain_base: float = 0.1
    strength_gain_per_quality: float = 0.1
    strength_penalty: float = 0.2

    # ---- Difficulty smoothing: D = D * retain + weight * (1 - retain) ----
    difficulty_retain: float = 0.8
    session_difficulty_weight: tuple[tuple[str, float], ...] = (("easy", 0.2), ("medium", 0.5), ("hard", 0.8))

    # ---- History and statistics ----
    history_capacity: int = HISTORY_CAPACITY
    stats_window: int = STATS_WINDOW
    mastery_min_reviews: int = 5
    mastery_min_strength: float = 0.8
    learning_max_reviews: int = 3

    def __post_init__(self):
        """Reject inconsistent bounds at construction time."""
        if not 0 < self.min_ease_factor <= self.max_ease_factor:
            raise ValueError(
                f"Ease bounds must satisfy 0 < min <= max, got "
                f"{self.min_ease_factor}..{self.max_ease_factor}"
            )
        if not self.min_ease_factor <= self.initial_ease_factor <= self.max_ease_factor:
            raise ValueError(
                f"initial_ease_factor {self.initial_ease_factor} outside "
                f"{self.min_ease_factor}..{self.max_ease_factor}"
            )
        if not 0 < self.min_interval <= self.max_interval:
            raise ValueError(
                f"Interval bounds must satisfy 0 < min <= max, got "
                f"{self.min_interval}..{self.max_interval}"
            )
        if not self.learning_steps or any(step <= 0 for step in self.learning_steps):
            raise ValueError("learning_steps must be a non-empty list of positive minutes")
        for name in ("passing_grade", "easy_grade"):
            value = getattr(self, name)
            if not 0 <= value <= 5:
                raise ValueError(f"{name} must be within 0..5, got {value}")
        if not 0 <= self.initial_memory_strength <= 1:
            raise ValueError("initial_memory_strength must be within 0..1")
        if self.history_capacity < 1 or self.stats_window < 1:
            raise ValueError("history_capacity and stats_window must be positive")

        # Accept lists for learning_steps and dicts for the label tables
        object.__setattr__(self, "learning_steps", tuple(self.learning_steps))
        for name in ("difficulty_bonus", "session_difficulty_weight"):
            table = getattr(self, name)
            pairs = table.items() if isinstance(table, dict) else table
            object.__setattr__(self, name, tuple((str(label), float(value)) for label, value in pairs))

    def with_overrides(self, **changes) -> EngineConfig:
        """Return a new validated config with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, prefix: str = "SRS_") -> EngineConfig:
        """
        Build a config from environment variables.

        Each scalar field FOO maps to {prefix}FOO (e.g. SRS_MAX_INTERVAL).
        SRS_LEARNING_STEPS is a comma-separated list of minutes.
        Unset variables keep their defaults. A .env file is honoured.
        """
        load_dotenv()

        overrides = {}
        for f in fields(cls):
            raw = os.getenv(f"{prefix}{f.name.upper()}")
            if raw is None or raw.strip() == "":
                continue
            if f.name == "learning_steps":
                overrides[f.name] = tuple(float(part) for part in raw.split(",") if part.strip())
            elif f.type in ("int", int):
                overrides[f.name] = int(raw)
            elif f.type in ("float", float):
                overrides[f.name] = float(raw)
            # label tables are not configurable from the environment

        return cls(**overrides)


# ---- Level Presets ----
# Beginners get shorter maximum intervals and a softer penalty;
# advanced levels grow intervals faster.

LEVEL_PRESETS: dict[int, dict] = {
    1: {"min_interval": 1, "max_interval": 30, "initial_ease_factor": 2.2, "ease_penalty": 0.15},
    2: {"min_interval": 1, "max_interval": 60, "initial_ease_factor": 2.3},
    3: {"initial_ease_factor": 2.5},
    4: {"min_interval": 2, "max_interval": 180, "initial_ease_factor": 2.7, "ease_bonus": 0.20},
    5: {"min_interval": 3, "max_interval": 365, "initial_ease_factor": 2.8, "ease_bonus": 0.25},
}


def config_for_level(level: int, base: Optional[EngineConfig] = None) -> EngineConfig:
    """
    Apply the preset for a curriculum level on top of a base config.

    Args:
        level: Curriculum level (1-5)
        base: Config to start from (defaults to EngineConfig())

    Returns:
        New EngineConfig; base unchanged for unknown levels
    """
    base = base or EngineConfig()
    preset = LEVEL_PRESETS.get(level)
    if not preset:
        return base
    return base.with_overrides(**preset)


# ---- Performance Adaptation ----

def adapt_config_for_performance(
    config: EngineConfig,
    accuracy: float,
    retention: float,
    study_frequency: float
) -> EngineConfig:
    """
    Nudge scheduling toward how the learner is actually doing.

    - Accurate with good retention: larger ease bonus, higher initial ease
    - Inaccurate or forgetting: harsher penalty, lower initial ease
    - Studying rarely: cap the maximum interval at 30 days

    Args:
        config: Current config
        accuracy: Recent answer accuracy (0-1)
        retention: Recent retention (0-1)
        study_frequency: Share of days with study activity (0-1)

    Returns:
        New EngineConfig (config unchanged when no rule applies)
    """
    adjustments = {}

    if accuracy > 0.9 and retention > 0.85:
        adjustments["ease_bonus"] = min(0.30, config.ease_bonus + 0.05)
        adjustments["initial_ease_factor"] = min(3.0, config.max_ease_factor, config.initial_ease_factor + 0.1)

    if accuracy < 0.6 or retention < 0.5:
        adjustments["ease_penalty"] = min(0.30, config.ease_penalty + 0.05)
        adjustments["initial_ease_factor"] = max(2.0, config.min_ease_factor, config.initial_ease_factor - 0.1)

    if study_frequency < 0.3:
        adjustments["max_interval"] = max(config.min_interval, min(30, config.max_interval))

    if not adjustments:
        return config
    return config.with_overrides(**adjustments)


# ---- Pattern Presets ----
# Grammar is introduced more carefully, vocabulary quickly,
# listening weights response time more heavily.

PATTERN_PRESETS: dict[str, dict] = {
    "grammar": {"learning_steps": (5, 15), "difficulty_weight": 0.4},
    "vocabulary": {"learning_steps": (1, 10), "difficulty_weight": 0.2},
    "listening": {"learning_steps": (3, 12), "time_weight": 0.4},
}


def config_for_pattern(
    pattern_type: str,
    level: int,
    base: Optional[EngineConfig] = None
) -> EngineConfig:
    """
    Level preset plus the preset for a content pattern type.

    Unknown pattern types get the level preset only.
    """
    config = config_for_level(level, base)
    preset = PATTERN_PRESETS.get(pattern_type)
    if not preset:
        return config
    return config.with_overrides(**preset)
