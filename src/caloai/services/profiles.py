"""Health profile service."""

from dataclasses import dataclass
from typing import Protocol

from caloai.domain.errors import NotFoundError
from caloai.domain.profiles import MacroTargets, Profile, macro_targets


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, address: str) -> Profile | None:
        """Return the stored profile, if any."""

    def upsert_profile(self, address: str, profile: Profile) -> bool:
        """Store the profile and return True when it was newly created."""


@dataclass
class ProfileService:
    """Service for reading and replacing profiles."""

    repository: ProfileRepository

    def get_profile(self, address: str) -> Profile:
        """Return the stored profile or the default one."""
        return self.repository.get_profile(address) or Profile()

    def find_profile(self, address: str) -> Profile | None:
        """Return the stored profile without falling back to defaults."""
        return self.repository.get_profile(address)

    def save_profile(self, address: str, profile: Profile) -> bool:
        """Replace the profile wholesale; return True when created."""
        return self.repository.upsert_profile(address, profile)

    def get_macro_targets(self, address: str) -> MacroTargets:
        """Return macro targets derived from the stored calorie target."""
        target = self.get_profile(address).calorie_target_value()
        if target is None or target <= 0:
            raise NotFoundError("No calorie target set")
        return macro_targets(target)
