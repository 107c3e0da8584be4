"""
SRS Constants

Fixed values shared by the scheduling engine. Tunable parameters live on
EngineConfig; the values here are structural (enums, capacities, unit
conversions).
"""

from enum import Enum


# ---- Self-reported Difficulty ----

class ReviewDifficulty(str, Enum):
    """Learner's subjective difficulty for one answer."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ---- History Buffers ----

HISTORY_CAPACITY = 20   # Max entries kept in accuracy / response-time history
STATS_WINDOW = 10       # Recent entries used by the statistics aggregator
ANALYSIS_WINDOW = 5     # Recent entries used by performance analysis


# ---- Time Units ----

MINUTES_PER_DAY = 24 * 60
SECONDS_PER_DAY = 86400.0


# ---- Initial Item State ----

INITIAL_DIFFICULTY = 0.5  # Middle of the 0-1 difficulty scale
