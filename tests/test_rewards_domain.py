"""Tests for level and achievement rules."""

from datetime import UTC, datetime

import pytest

from caloai.domain.rewards import (
    ACHIEVEMENT_CATALOG,
    ACHIEVEMENT_UNLOCKED_ACTION,
    CLAIM_TOKENS_ACTION,
    LEVEL_THRESHOLDS,
    MAX_LEVEL,
    UNREACHABLE_POINTS,
    UserRewards,
    apply_claim,
    apply_points,
    compute_level,
    level_info,
    level_progress,
    points_for_next_level,
    unlock,
)

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("points", "level"),
    [
        (0, 1),
        (99, 1),
        (100, 2),
        (249, 2),
        (250, 3),
        (4999, 7),
        (9999, 9),
        (10000, 10),
        (50000, 10),
    ],
)
def test_compute_level_uses_thresholds(points: int, level: int) -> None:
    assert compute_level(points) == level


def test_compute_level_is_monotonic() -> None:
    levels = [compute_level(points) for points in range(0, 12000, 25)]
    assert levels == sorted(levels)
    assert levels[0] == 1
    assert levels[-1] == MAX_LEVEL


def test_points_for_next_level() -> None:
    assert points_for_next_level(1) == 100
    assert points_for_next_level(9) == 10000
    assert points_for_next_level(MAX_LEVEL) == UNREACHABLE_POINTS


def test_level_progress_is_relative_to_band() -> None:
    assert level_progress(0, 1) == 0
    assert level_progress(50, 1) == 50
    assert level_progress(175, 2) == 50
    assert level_progress(20000, MAX_LEVEL) == 100


def test_level_info_for_fresh_record() -> None:
    info = level_info(0, 1)
    assert info.next_level_points == 100
    assert info.points_to_next_level == 100
    assert info.level_progress == 0


def test_new_record_has_catalog_locked() -> None:
    rewards = UserRewards.new("0xabc")

    assert [a.id for a in rewards.achievements] == [d.id for d in ACHIEVEMENT_CATALOG]
    assert not any(a.is_unlocked for a in rewards.achievements)
    assert rewards.total_points == 0
    assert rewards.current_level == 1


def test_three_meal_logs_stay_on_level_one() -> None:
    rewards = UserRewards.new("0xabc")

    for action in ("log_breakfast", "log_lunch", "log_supper"):
        apply_points(rewards, action, 10, None, NOW)

    assert rewards.total_points == 30
    assert rewards.current_level == 1
    assert len(rewards.points_history) == 3
    assert rewards.points_history[0].description == "Earned 10 points for log_breakfast"


def test_crossing_level_two_unlocks_level_achievement() -> None:
    rewards = UserRewards.new("0xabc")
    rewards.total_points = 95

    unlocked = apply_points(rewards, "log_supper", 10, "Logged supper", NOW)

    assert rewards.total_points == 105
    assert rewards.current_level == 2
    assert [a.id for a in unlocked] == ["level_2"]
    level_two = rewards.find_achievement("level_2")
    assert level_two is not None
    assert level_two.is_unlocked
    assert level_two.date_unlocked == NOW
    assert len(rewards.points_history) == 2
    assert rewards.points_history[1].action == ACHIEVEMENT_UNLOCKED_ACTION
    assert rewards.points_history[1].points == 0


def test_skipping_levels_unlocks_every_crossed_level_achievement() -> None:
    rewards = UserRewards.new("0xabc")

    unlocked = apply_points(rewards, "bonus", 1200, None, NOW)

    assert rewards.current_level == 5
    assert [a.id for a in unlocked] == ["level_2", "level_5"]


def test_unlock_credits_award_and_settles_level() -> None:
    rewards = UserRewards.new("0xabc")
    rewards.total_points = 60
    achievement = rewards.find_achievement("complete_profile")
    assert achievement is not None

    unlock(rewards, achievement, NOW)

    assert rewards.total_points == 110
    assert rewards.current_level == 2
    assert [t.description for t in rewards.points_history] == [
        "Unlocked achievement: Identity Established",
        "Unlocked achievement: Level 2 Achieved",
    ]


def test_apply_claim_resets_balance_and_records_transaction() -> None:
    rewards = UserRewards.new("0xabc")
    apply_points(rewards, "bonus", 300, None, NOW)

    apply_claim(rewards, 300, "0xhash", NOW)

    assert rewards.total_points == 0
    assert rewards.current_level == 1
    assert rewards.points_history[-1].action == CLAIM_TOKENS_ACTION
    assert rewards.points_history[-1].points == -300
    assert rewards.claimed_transactions == ["0xhash"]


def test_apply_claim_without_transaction_id() -> None:
    rewards = UserRewards.new("0xabc")

    apply_claim(rewards, 0, None, NOW)

    assert rewards.total_points == 0
    assert rewards.claimed_transactions == []


def test_thresholds_are_strictly_increasing() -> None:
    assert list(LEVEL_THRESHOLDS) == sorted(set(LEVEL_THRESHOLDS))
    assert LEVEL_THRESHOLDS[0] == 0
