"""Supabase repository for health profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from caloai.adapters.supabase_query import execute
from caloai.domain.profiles import Profile
from caloai.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles."""

    client: Client

    def get_profile(self, address: str) -> Profile | None:
        """Return the stored profile for an address."""
        response = execute(
            self.client.table("profiles")
            .select("profile")
            .eq("address", address)
            .limit(1),
            "fetch profile",
        )
        if not response.data:
            return None
        return Profile.model_validate(response.data[0].get("profile") or {})

    def upsert_profile(self, address: str, profile: Profile) -> bool:
        """Insert or replace the profile row."""
        existing = execute(
            self.client.table("profiles")
            .select("address")
            .eq("address", address)
            .limit(1),
            "fetch profile",
        )
        execute(
            self.client.table("profiles").upsert(
                {
                    "address": address,
                    "profile": profile.model_dump(by_alias=True, mode="json"),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="address",
            ),
            "save profile",
        )
        return not existing.data
