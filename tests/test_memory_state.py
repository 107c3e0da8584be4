import math
from datetime import timedelta

import pytest

from review_engine.srs import EngineConfig, estimate_strength, is_mastered
from review_engine.srs.memory_state import calculate_retention, calculate_stability


def test_strength_unchanged_at_review_time(make_item, now):
    item = make_item(strength=0.7, last_reviewed=now)
    assert estimate_strength(item, now) == pytest.approx(0.7)


def test_strength_decays_exponentially(make_item, now):
    item = make_item(strength=0.8, ease_factor=2.5, difficulty=0.5, last_reviewed=now - timedelta(days=3))

    stability = 2.5 * 1.5
    assert estimate_strength(item, now) == pytest.approx(0.8 * math.exp(-3 / stability))


def test_strength_is_non_increasing_over_time(make_item, now):
    item = make_item(strength=0.9, last_reviewed=now)
    points = [now + timedelta(hours=h) for h in (-5, 0, 1, 12, 24, 24 * 7, 24 * 365)]

    estimates = [estimate_strength(item, t) for t in points]

    assert estimates == sorted(estimates, reverse=True)
    assert all(0.0 <= e <= 1.0 for e in estimates)


def test_harder_items_decay_slower(make_item, now):
    past = now - timedelta(days=5)
    easy = make_item(difficulty=0.1, last_reviewed=past)
    hard = make_item(difficulty=0.9, last_reviewed=past)
    assert estimate_strength(hard, now) > estimate_strength(easy, now)


def test_estimate_clamps_out_of_range_strength(make_item, now):
    assert estimate_strength(make_item(strength=1.7, last_reviewed=now), now) == 1.0
    assert estimate_strength(make_item(strength=-0.3, last_reviewed=now), now) == 0.0


def test_stability_always_positive():
    assert calculate_stability(1.3, 0.0) == pytest.approx(1.3)
    assert calculate_stability(2.0, -4.0) > 0
    assert calculate_stability(0.0, 0.5) > 0


def test_retention_is_one_at_review_time():
    assert calculate_retention(0, 2.0) == 1.0


def test_retention_follows_curve_when_review_is_in_the_future():
    assert calculate_retention(-1, 2.0) == pytest.approx(math.exp(0.5))
    assert calculate_retention(-1, 2.0) > 1.0


def test_strength_reviewed_after_now_follows_curve_then_clamps(make_item, now):
    item = make_item(strength=0.5, ease_factor=2.5, difficulty=0.5, last_reviewed=now + timedelta(days=1))

    assert estimate_strength(item, now) == pytest.approx(0.5 * math.exp(1 / 3.75))
    assert estimate_strength(item, now) == pytest.approx(0.6528, abs=1e-4)


def test_far_future_review_does_not_overflow(make_item, now):
    item = make_item(strength=0.5, last_reviewed=now + timedelta(days=100000))

    assert estimate_strength(item, now) == 1.0


def test_is_mastered_requires_reviews_and_strength(make_item, now):
    assert is_mastered(make_item(review_count=5, strength=0.95, last_reviewed=now), now)
    assert not is_mastered(make_item(review_count=4, strength=0.95, last_reviewed=now), now)
    assert not is_mastered(make_item(review_count=5, strength=0.8, last_reviewed=now), now)


def test_is_mastered_honours_config(make_item, now):
    config = EngineConfig(mastery_min_reviews=2, mastery_min_strength=0.5)
    assert is_mastered(make_item(review_count=2, strength=0.6, last_reviewed=now), now, config)
