import logging
from datetime import timedelta

import pytest

from review_engine.srs import (
    EngineConfig,
    HISTORY_CAPACITY,
    ReviewDifficulty,
    create_item,
    preview_next_review,
    process_review,
)


# ---- Scenario A / B ----

def test_successful_review_grows_interval_by_ease(make_item, make_outcome, now):
    item = make_item(ease_factor=2.5, interval=6, review_count=2, strength=0.8)

    updated = process_review(item, make_outcome(), now=now)

    assert updated.memory.review_count == 3
    assert updated.memory.interval == 15
    assert updated.memory.ease_factor == pytest.approx(2.6)
    assert updated.memory.strength == pytest.approx(1.0)
    assert updated.memory.last_reviewed == now
    assert updated.memory.next_review == now + timedelta(days=15)
    assert updated.memory.difficulty == pytest.approx(0.44)
    assert updated.performance.accuracy == (1,)
    assert updated.performance.response_time == (1500,)
    assert updated.performance.streak == 1


def test_failed_review_resets_and_penalizes(make_item, make_outcome, now):
    item = make_item(ease_factor=2.5, interval=6, review_count=2, strength=0.8, streak=4, mistakes=1)

    updated = process_review(item, make_outcome(is_correct=False), now=now)

    assert updated.memory.review_count == 0
    # First learning step (1 minute) is below the default 1-day minimum
    assert updated.memory.interval == 1
    assert updated.memory.ease_factor == pytest.approx(2.3)
    assert updated.memory.strength == pytest.approx(0.6)
    assert updated.performance.streak == 0
    assert updated.performance.mistakes == 2
    assert updated.performance.accuracy == (0,)


def test_failed_review_uses_first_learning_step_as_day_fraction(make_item, make_outcome, now):
    config = EngineConfig(min_interval=0.0001, learning_steps=(10, 30))

    updated = process_review(make_item(), make_outcome(is_correct=False), config, now=now)

    assert updated.memory.interval == pytest.approx(10 / 1440)
    drift = updated.memory.next_review - (now + timedelta(minutes=10))
    assert abs(drift.total_seconds()) < 0.001


# ---- Interval steps ----

def test_first_success_uses_graduating_interval(make_item, make_outcome, now):
    config = EngineConfig(graduating_interval=2)
    updated = process_review(make_item(review_count=0, interval=0), make_outcome(), config, now=now)
    assert updated.memory.interval == 2
    assert updated.memory.review_count == 1


def test_second_success_uses_fixed_six_days(make_item, make_outcome, now):
    updated = process_review(make_item(review_count=1, interval=1, ease_factor=3.4), make_outcome(), now=now)
    assert updated.memory.interval == 6


def test_interval_rounds_half_up(make_item, make_outcome, now):
    # 5 * 2.5 = 12.5
    updated = process_review(make_item(interval=5, ease_factor=2.5), make_outcome(), now=now)
    assert updated.memory.interval == 13


def test_interval_clamped_to_max(make_item, make_outcome, now):
    updated = process_review(make_item(interval=30000, ease_factor=2.5), make_outcome(), now=now)
    assert updated.memory.interval == 36500


# ---- Ease factor ----

def test_barely_passing_review_lowers_ease(make_item, make_outcome, now):
    outcome = make_outcome(response_time=7000, difficulty=ReviewDifficulty.HARD, confidence=0.0)
    updated = process_review(make_item(ease_factor=2.5), outcome, now=now)
    assert updated.memory.review_count == 3
    assert updated.memory.ease_factor == pytest.approx(2.36)


def test_ease_never_exceeds_max(make_item, make_outcome, now):
    updated = process_review(make_item(ease_factor=3.45), make_outcome(), now=now)
    assert updated.memory.ease_factor == 3.5


def test_ease_never_drops_below_min(make_item, make_outcome, now):
    updated = process_review(make_item(ease_factor=1.4), make_outcome(is_correct=False), now=now)
    assert updated.memory.ease_factor == 1.3


def test_strength_clamped_at_zero(make_item, make_outcome, now):
    updated = process_review(make_item(strength=0.1), make_outcome(is_correct=False), now=now)
    assert updated.memory.strength == 0.0


# ---- Invariants ----

@pytest.mark.parametrize("is_correct", [True, False])
@pytest.mark.parametrize("ease_factor,interval,review_count", [
    (1.3, 0, 0),
    (3.5, 36500, 10),
    (9.0, -5, 3),
    (0.5, 100, 1),
])
def test_outputs_stay_within_bounds(make_item, make_outcome, now, config, is_correct, ease_factor, interval, review_count):
    item = make_item(ease_factor=ease_factor, interval=interval, review_count=review_count, strength=1.5, difficulty=3.0)

    updated = process_review(item, make_outcome(is_correct=is_correct, confidence=-2), config, now=now)

    assert config.min_ease_factor <= updated.memory.ease_factor <= config.max_ease_factor
    assert config.min_interval <= updated.memory.interval <= config.max_interval
    assert 0.0 <= updated.memory.strength <= 1.0
    assert 0.0 <= updated.memory.difficulty <= 1.0
    assert updated.memory.next_review > updated.memory.last_reviewed


def test_history_keeps_most_recent_entries(make_item, make_outcome, now):
    item = make_item(accuracy=[1] * HISTORY_CAPACITY, response_time=range(HISTORY_CAPACITY))

    updated = process_review(item, make_outcome(is_correct=False, response_time=9999), now=now)

    assert len(updated.performance.accuracy) == HISTORY_CAPACITY
    assert len(updated.performance.response_time) == HISTORY_CAPACITY
    assert updated.performance.accuracy[-1] == 0
    assert updated.performance.response_time[0] == 1
    assert updated.performance.response_time[-1] == 9999


def test_process_review_does_not_modify_input(make_item, make_outcome, now):
    item = make_item()
    snapshot = make_item()

    updated = process_review(item, make_outcome(), now=now)

    assert item == snapshot
    assert updated is not item
    assert updated.content is item.content


def test_mastery_is_logged_when_threshold_crossed(make_item, make_outcome, now, engine_logs):
    item = make_item(review_count=4, strength=1.0, last_reviewed=now)

    process_review(item, make_outcome(), now=now)

    assert any(r.getMessage() == "item_mastered" for r in engine_logs.records)


# ---- Creation and preview ----

def test_create_item_defaults(content, now):
    item = create_item(content, now=now)

    assert item.item_id == f"1-2-{int(now.timestamp() * 1000)}"
    assert item.content is content
    assert item.memory.strength == 0.8
    assert item.memory.ease_factor == 2.5
    assert item.memory.interval == 0
    assert item.memory.review_count == 0
    assert item.memory.difficulty == 0.5
    assert item.memory.last_reviewed == now
    assert item.memory.next_review == now + timedelta(minutes=1)
    assert item.performance.accuracy == ()
    assert item.performance.response_time == ()
    assert item.performance.streak == 0
    assert item.performance.mistakes == 0


def test_create_item_uses_caller_id_and_config(content, now):
    config = EngineConfig(initial_ease_factor=2.2, initial_memory_strength=0.3, learning_steps=[5, 15])
    item = create_item(content, config, item_id="card-42", now=now)

    assert item.item_id == "card-42"
    assert item.memory.ease_factor == 2.2
    assert item.memory.strength == 0.3
    assert item.memory.next_review == now + timedelta(minutes=5)


@pytest.mark.parametrize("is_correct", [True, False])
def test_preview_matches_process_review(make_item, make_outcome, now, is_correct):
    item = make_item()
    outcome = make_outcome(is_correct=is_correct)

    assert preview_next_review(item, outcome, now=now) == process_review(item, outcome, now=now).memory.next_review
