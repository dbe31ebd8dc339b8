"""Supabase repository for rewards records."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from caloai.adapters.supabase_query import execute
from caloai.domain.rewards import Achievement, PointTransaction, UserRewards
from caloai.services.rewards import (
    RewardsRepository,
    serialize_achievement,
    serialize_transaction,
)

_COLUMNS = (
    "address, total_points, current_level, points_history, achievements, "
    "last_streak, current_streak, longest_streak, claimed_transactions"
)


@dataclass
class SupabaseRewardsRepository(RewardsRepository):
    """Supabase implementation for rewards."""

    client: Client

    def get_rewards(self, address: str) -> UserRewards | None:
        """Return the rewards record for an address."""
        response = execute(
            self.client.table("rewards")
            .select(_COLUMNS)
            .eq("address", address)
            .limit(1),
            "fetch rewards",
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_rewards(self, rewards: UserRewards) -> None:
        """Insert a new rewards row, leaving an existing row for the address."""
        execute(
            self.client.table("rewards").upsert(
                _to_row(rewards), on_conflict="address", ignore_duplicates=True
            ),
            "create rewards",
        )

    def save_rewards(self, rewards: UserRewards) -> None:
        """Write points, level, history and achievements together."""
        payload = _to_row(rewards)
        payload.pop("address")
        execute(
            self.client.table("rewards").update(payload).eq("address", rewards.address),
            "save rewards",
        )


def _to_row(rewards: UserRewards) -> dict[str, object]:
    return {
        "address": rewards.address,
        "total_points": rewards.total_points,
        "current_level": rewards.current_level,
        "points_history": [serialize_transaction(t) for t in rewards.points_history],
        "achievements": [serialize_achievement(a) for a in rewards.achievements],
        "last_streak": rewards.last_streak.isoformat() if rewards.last_streak else None,
        "current_streak": rewards.current_streak,
        "longest_streak": rewards.longest_streak,
        "claimed_transactions": list(rewards.claimed_transactions),
        "updated_at": datetime.now(tz=UTC).isoformat(),
    }


def _parse_row(row: dict[str, object]) -> UserRewards:
    return UserRewards(
        address=str(row["address"]),
        total_points=int(row.get("total_points") or 0),
        current_level=int(row.get("current_level") or 1),
        points_history=[
            PointTransaction(
                timestamp=_parse_datetime(item.get("timestamp")) or datetime.min,
                action=str(item.get("action", "")),
                points=int(item.get("points", 0)),
                description=str(item.get("description", "")),
            )
            for item in row.get("points_history") or []
        ],
        achievements=[
            Achievement(
                id=str(item["id"]),
                name=str(item.get("name", "")),
                description=str(item.get("description", "")),
                icon=str(item.get("icon", "")),
                points_awarded=int(item.get("pointsAwarded", 0)),
                is_unlocked=bool(item.get("isUnlocked", False)),
                date_unlocked=_parse_datetime(item.get("dateUnlocked")),
            )
            for item in row.get("achievements") or []
        ],
        last_streak=_parse_datetime(row.get("last_streak")),
        current_streak=int(row.get("current_streak") or 0),
        longest_streak=int(row.get("longest_streak") or 0),
        claimed_transactions=[str(tx) for tx in row.get("claimed_transactions") or []],
    )


def _parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
