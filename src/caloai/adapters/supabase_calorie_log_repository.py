"""Supabase repository for calorie histories."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from caloai.adapters.supabase_query import execute
from caloai.domain.calories import CalorieHistory
from caloai.services.calories import CalorieLogRepository


@dataclass
class SupabaseCalorieLogRepository(CalorieLogRepository):
    """Supabase implementation for calorie logs."""

    client: Client

    def get_history(self, address: str) -> CalorieHistory | None:
        """Return the date-keyed history for an address."""
        response = execute(
            self.client.table("calorie_logs")
            .select("calorie_data")
            .eq("address", address)
            .limit(1),
            "fetch calorie data",
        )
        if not response.data:
            return None
        return CalorieHistory.model_validate(response.data[0].get("calorie_data") or {})

    def upsert_history(self, address: str, history: CalorieHistory) -> bool:
        """Replace the whole history row."""
        existing = execute(
            self.client.table("calorie_logs")
            .select("address")
            .eq("address", address)
            .limit(1),
            "fetch calorie data",
        )
        execute(
            self.client.table("calorie_logs").upsert(
                {
                    "address": address,
                    "calorie_data": history.model_dump(
                        by_alias=True, mode="json", exclude_none=True
                    ),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="address",
            ),
            "save calorie data",
        )
        return not existing.data
