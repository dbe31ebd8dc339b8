"""Rewards service: points, levels, achievements and token claims."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from caloai.domain.errors import NotFoundError, PersistenceError, ValidationError
from caloai.domain.rewards import (
    Achievement,
    PointTransaction,
    UserRewards,
    apply_claim,
    apply_points,
    level_info,
    unlock,
)

logger = logging.getLogger(__name__)

UPLOAD_MEAL_PHOTO_ACTION = "upload_meal_photo"
UPLOAD_MEAL_PHOTO_POINTS = 5
PHOTO_ACHIEVEMENT_ID = "photo_meals_5"
PHOTO_ACHIEVEMENT_THRESHOLD = 5


class RewardsRepository(Protocol):
    """Persistence interface for rewards records."""

    def get_rewards(self, address: str) -> UserRewards | None:
        """Return the rewards record for an address, if present."""

    def create_rewards(self, rewards: UserRewards) -> None:
        """Insert a new rewards record unless one already exists."""

    def save_rewards(self, rewards: UserRewards) -> None:
        """Overwrite the mutable fields of an existing rewards record."""


@dataclass(frozen=True)
class PointsAwarded:
    """Outcome of crediting points."""

    points: int
    rewards: UserRewards
    level_up: bool
    level_up_achievement: Achievement | None


@dataclass(frozen=True)
class AchievementUnlock:
    """Outcome of an unlock request."""

    success: bool
    achievement: Achievement
    points_awarded: int
    total_points: int
    message: str


@dataclass(frozen=True)
class ClaimResult:
    """Outcome of a token claim."""

    updated_points: int
    already_processed: bool


@dataclass
class RewardsService:
    """Applies point-earning actions to per-address rewards records.

    Every operation is a read-modify-write against the repository. Concurrent
    writers for the same address are not coordinated; the last save wins.
    """

    repository: RewardsRepository

    def ensure_rewards(self, address: str) -> UserRewards:
        """Return the rewards record, creating a locked one on first access."""
        rewards = self.repository.get_rewards(address)
        if rewards is not None:
            return rewards
        self.repository.create_rewards(UserRewards.new(address))
        logger.info("Initialized rewards", extra={"address": address})
        rewards = self.repository.get_rewards(address)
        if rewards is None:
            raise PersistenceError("Failed to create rewards")
        return rewards

    def add_points(
        self,
        address: str,
        action: str,
        points: int,
        description: str | None = None,
    ) -> PointsAwarded:
        """Credit points for an action and unlock any level achievements."""
        if not action or points <= 0:
            raise ValidationError("Missing action or points")
        rewards = self.ensure_rewards(address)
        previous_level = rewards.current_level
        unlocked = apply_points(
            rewards, action, points, description, datetime.now(tz=UTC)
        )
        self.repository.save_rewards(rewards)
        if rewards.current_level > previous_level:
            logger.info(
                "Level up",
                extra={"address": address, "level": rewards.current_level},
            )
        return PointsAwarded(
            points=points,
            rewards=rewards,
            level_up=rewards.current_level > previous_level,
            level_up_achievement=unlocked[-1] if unlocked else None,
        )

    def unlock_achievement(
        self, address: str, achievement_id: str
    ) -> AchievementUnlock:
        """Unlock a catalog achievement once and credit its award."""
        if not achievement_id:
            raise ValidationError("Missing address or achievement ID")
        rewards = self.ensure_rewards(address)
        achievement = rewards.find_achievement(achievement_id)
        if achievement is None:
            raise NotFoundError("Achievement not found")
        if achievement.is_unlocked:
            return AchievementUnlock(
                success=False,
                achievement=achievement,
                points_awarded=0,
                total_points=rewards.total_points,
                message="Achievement already unlocked",
            )
        unlock(rewards, achievement, datetime.now(tz=UTC))
        self.repository.save_rewards(rewards)
        logger.info(
            "Achievement unlocked",
            extra={"address": address, "achievement_id": achievement_id},
        )
        return AchievementUnlock(
            success=True,
            achievement=achievement,
            points_awarded=achievement.points_awarded,
            total_points=rewards.total_points,
            message="Achievement unlocked",
        )

    def record_meal_photo(self, address: str) -> PointsAwarded:
        """Award points for an analyzed meal photo.

        The fifth photo also unlocks the photographer achievement.
        """
        rewards = self.ensure_rewards(address)
        previous_level = rewards.current_level
        now = datetime.now(tz=UTC)
        unlocked = apply_points(
            rewards,
            UPLOAD_MEAL_PHOTO_ACTION,
            UPLOAD_MEAL_PHOTO_POINTS,
            "Uploaded a meal photo",
            now,
        )
        photo_count = sum(
            1
            for transaction in rewards.points_history
            if transaction.action == UPLOAD_MEAL_PHOTO_ACTION
        )
        achievement = rewards.find_achievement(PHOTO_ACHIEVEMENT_ID)
        if (
            photo_count >= PHOTO_ACHIEVEMENT_THRESHOLD
            and achievement is not None
            and not achievement.is_unlocked
        ):
            unlock(rewards, achievement, now)
        self.repository.save_rewards(rewards)
        return PointsAwarded(
            points=UPLOAD_MEAL_PHOTO_POINTS,
            rewards=rewards,
            level_up=rewards.current_level > previous_level,
            level_up_achievement=unlocked[-1] if unlocked else None,
        )

    def claim_and_reset_points(
        self,
        address: str,
        claimed_points: int = 0,
        transaction_id: str | None = None,
    ) -> ClaimResult:
        """Reset the balance to zero after an on-chain claim.

        A claim carrying an already processed transaction id is a no-op.
        """
        if claimed_points < 0:
            raise ValidationError("Claimed points must not be negative")
        rewards = self.repository.get_rewards(address)
        if rewards is None:
            raise NotFoundError("User not found")
        if transaction_id and transaction_id in rewards.claimed_transactions:
            logger.warning(
                "Duplicate claim ignored",
                extra={"address": address, "transaction_id": transaction_id},
            )
            return ClaimResult(
                updated_points=rewards.total_points, already_processed=True
            )
        apply_claim(rewards, claimed_points, transaction_id, datetime.now(tz=UTC))
        self.repository.save_rewards(rewards)
        logger.info(
            "Points claimed",
            extra={"address": address, "claimed_points": claimed_points},
        )
        return ClaimResult(updated_points=0, already_processed=False)


def serialize_transaction(transaction: PointTransaction) -> dict[str, object]:
    return {
        "timestamp": transaction.timestamp.isoformat(),
        "action": transaction.action,
        "points": transaction.points,
        "description": transaction.description,
    }


def serialize_achievement(achievement: Achievement) -> dict[str, object]:
    return {
        "id": achievement.id,
        "name": achievement.name,
        "description": achievement.description,
        "icon": achievement.icon,
        "pointsAwarded": achievement.points_awarded,
        "isUnlocked": achievement.is_unlocked,
        "dateUnlocked": achievement.date_unlocked.isoformat()
        if achievement.date_unlocked
        else None,
    }


def serialize_level(rewards: UserRewards) -> dict[str, object]:
    info = level_info(rewards.total_points, rewards.current_level)
    return {
        "nextLevelPoints": info.next_level_points,
        "pointsToNextLevel": info.points_to_next_level,
        "levelProgress": info.level_progress,
    }


def serialize_rewards(rewards: UserRewards) -> dict[str, object]:
    """Render a rewards record with its level progress."""
    return {
        "address": rewards.address,
        "totalPoints": rewards.total_points,
        "currentLevel": rewards.current_level,
        "pointsHistory": [serialize_transaction(t) for t in rewards.points_history],
        "achievements": [serialize_achievement(a) for a in rewards.achievements],
        "lastStreak": rewards.last_streak.isoformat() if rewards.last_streak else None,
        "currentStreak": rewards.current_streak,
        "longestStreak": rewards.longest_streak,
        **serialize_level(rewards),
    }


def serialize_points_awarded(result: PointsAwarded) -> dict[str, object]:
    """Render the outcome of an award."""
    return {
        "success": True,
        "points": result.points,
        "totalPoints": result.rewards.total_points,
        "currentLevel": result.rewards.current_level,
        "levelUp": result.level_up,
        "levelUpAchievement": serialize_achievement(result.level_up_achievement)
        if result.level_up_achievement
        else None,
        **serialize_level(result.rewards),
    }
