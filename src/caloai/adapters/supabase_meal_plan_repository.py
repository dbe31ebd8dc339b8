"""Supabase repository for meal plans."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from caloai.adapters.supabase_query import execute
from caloai.domain.meal_plans import MealPlan
from caloai.services.meal_plans import MealPlanRepository


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for meal plans."""

    client: Client

    def get_meal_plan(self, address: str) -> MealPlan | None:
        """Return the stored plan for an address."""
        response = execute(
            self.client.table("meal_plans")
            .select("meal_plan")
            .eq("address", address)
            .limit(1),
            "fetch meal plan",
        )
        if not response.data or not response.data[0].get("meal_plan"):
            return None
        return MealPlan.model_validate(response.data[0]["meal_plan"])

    def upsert_meal_plan(self, address: str, plan: MealPlan) -> None:
        """Replace the stored plan."""
        execute(
            self.client.table("meal_plans").upsert(
                {
                    "address": address,
                    "meal_plan": plan.model_dump(by_alias=True, mode="json"),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="address",
            ),
            "save meal plan",
        )
