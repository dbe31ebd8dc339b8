"""Rewards domain: levels, achievements and point transactions."""

from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import datetime

LEVEL_THRESHOLDS: tuple[int, ...] = (
    0,
    100,
    250,
    500,
    1000,
    2000,
    3500,
    5000,
    7500,
    10000,
)
MAX_LEVEL = len(LEVEL_THRESHOLDS)
UNREACHABLE_POINTS = 999_999

ACHIEVEMENT_UNLOCKED_ACTION = "achievement_unlocked"
CLAIM_TOKENS_ACTION = "claim_tokens"


@dataclass(frozen=True)
class AchievementDefinition:
    """Static catalog entry for an achievement."""

    id: str
    name: str
    description: str
    icon: str
    points_awarded: int


ACHIEVEMENT_CATALOG: tuple[AchievementDefinition, ...] = (
    AchievementDefinition(
        "first_meal", "First Bite", "Log your first meal", "🍽️", 10
    ),
    AchievementDefinition(
        "meal_streak_3",
        "Consistent Eater",
        "Log meals for 3 consecutive days",
        "📆",
        25,
    ),
    AchievementDefinition(
        "meal_streak_7",
        "Week Warrior",
        "Log meals for 7 consecutive days",
        "🗓️",
        50,
    ),
    AchievementDefinition(
        "photo_meals_5", "Food Photographer", "Upload 5 meal photos", "📸", 30
    ),
    AchievementDefinition(
        "complete_profile",
        "Identity Established",
        "Complete your health profile",
        "👤",
        50,
    ),
    AchievementDefinition(
        "calorie_goal_5", "Goal Getter", "Meet your calorie goal for 5 days", "🎯", 40
    ),
    AchievementDefinition(
        "try_10_foods", "Food Explorer", "Try and log 10 different foods", "🍲", 35
    ),
    AchievementDefinition(
        "generate_meal_plan",
        "Meal Planner",
        "Generate your first AI meal plan",
        "📝",
        15,
    ),
    AchievementDefinition("level_2", "Level 2 Achieved", "Reach Level 2", "⭐", 0),
    AchievementDefinition("level_5", "Health Enthusiast", "Reach Level 5", "🌟", 0),
)


@dataclass(frozen=True)
class PointTransaction:
    """Immutable record of a point delta."""

    timestamp: datetime
    action: str
    points: int
    description: str


@dataclass
class Achievement:
    """Per-user achievement state."""

    id: str
    name: str
    description: str
    icon: str
    points_awarded: int
    is_unlocked: bool = False
    date_unlocked: datetime | None = None

    @classmethod
    def locked(cls, definition: AchievementDefinition) -> "Achievement":
        """Create a locked achievement from its catalog definition."""
        return cls(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            icon=definition.icon,
            points_awarded=definition.points_awarded,
        )


@dataclass
class UserRewards:
    """Rewards state for a wallet address."""

    address: str
    total_points: int = 0
    current_level: int = 1
    points_history: list[PointTransaction] = field(default_factory=list)
    achievements: list[Achievement] = field(default_factory=list)
    last_streak: datetime | None = None
    current_streak: int = 0
    longest_streak: int = 0
    claimed_transactions: list[str] = field(default_factory=list)

    @classmethod
    def new(cls, address: str) -> "UserRewards":
        """Create a fresh record with the whole catalog locked."""
        return cls(
            address=address,
            achievements=[
                Achievement.locked(definition) for definition in ACHIEVEMENT_CATALOG
            ],
        )

    def find_achievement(self, achievement_id: str) -> Achievement | None:
        """Return the achievement with the given id, if present."""
        for achievement in self.achievements:
            if achievement.id == achievement_id:
                return achievement
        return None


@dataclass(frozen=True)
class LevelInfo:
    """Progress details derived from total points."""

    next_level_points: int
    points_to_next_level: int
    level_progress: int


def compute_level(total_points: int) -> int:
    """Return the level (1-10) reached with the given cumulative points."""
    return max(1, bisect_right(LEVEL_THRESHOLDS, total_points))


def points_for_next_level(level: int) -> int:
    """Return the threshold of the level after ``level``."""
    if level >= MAX_LEVEL:
        return UNREACHABLE_POINTS
    return LEVEL_THRESHOLDS[max(level, 1)]


def level_progress(total_points: int, level: int) -> int:
    """Return the percentage of the current level band already earned."""
    if level >= MAX_LEVEL:
        return 100
    band_start = LEVEL_THRESHOLDS[max(level, 1) - 1]
    band_end = points_for_next_level(level)
    percent = (total_points - band_start) * 100 // (band_end - band_start)
    return min(max(int(percent), 0), 100)


def level_info(total_points: int, level: int) -> LevelInfo:
    """Bundle next-level threshold, remaining points and progress."""
    next_points = points_for_next_level(level)
    return LevelInfo(
        next_level_points=next_points,
        points_to_next_level=next_points - total_points,
        level_progress=level_progress(total_points, level),
    )


def unlock(rewards: UserRewards, achievement: Achievement, now: datetime) -> None:
    """Mark an achievement unlocked and credit its award.

    Any level achievements reached through the award are unlocked as well.
    """
    _mark_unlocked(rewards, achievement, now)
    _settle_level(rewards, now)


def apply_points(
    rewards: UserRewards,
    action: str,
    points: int,
    description: str | None,
    now: datetime,
) -> list[Achievement]:
    """Credit points and return the level achievements unlocked as a result."""
    rewards.points_history.append(
        PointTransaction(
            timestamp=now,
            action=action,
            points=points,
            description=description or f"Earned {points} points for {action}",
        )
    )
    rewards.total_points += points
    return _settle_level(rewards, now)


def apply_claim(
    rewards: UserRewards, claimed_points: int, transaction_id: str | None, now: datetime
) -> None:
    """Reset the balance to zero and record the claim."""
    rewards.total_points = 0
    rewards.current_level = compute_level(0)
    rewards.points_history.append(
        PointTransaction(
            timestamp=now,
            action=CLAIM_TOKENS_ACTION,
            points=-claimed_points,
            description="Claimed points for DIET tokens",
        )
    )
    if transaction_id:
        rewards.claimed_transactions.append(transaction_id)


def _settle_level(rewards: UserRewards, now: datetime) -> list[Achievement]:
    unlocked: list[Achievement] = []
    new_level = compute_level(rewards.total_points)
    while new_level > rewards.current_level:
        previous_level = rewards.current_level
        rewards.current_level = new_level
        for level in range(previous_level + 1, new_level + 1):
            achievement = rewards.find_achievement(f"level_{level}")
            if achievement is None or achievement.is_unlocked:
                continue
            _mark_unlocked(rewards, achievement, now)
            unlocked.append(achievement)
        new_level = compute_level(rewards.total_points)
    rewards.current_level = new_level
    return unlocked


def _mark_unlocked(
    rewards: UserRewards, achievement: Achievement, now: datetime
) -> None:
    achievement.is_unlocked = True
    achievement.date_unlocked = now
    rewards.points_history.append(
        PointTransaction(
            timestamp=now,
            action=ACHIEVEMENT_UNLOCKED_ACTION,
            points=achievement.points_awarded,
            description=f"Unlocked achievement: {achievement.name}",
        )
    )
    rewards.total_points += achievement.points_awarded
