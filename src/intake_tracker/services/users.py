"""User profile lookups."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from intake_tracker.domain.errors import UserNotFoundError
from intake_tracker.domain.profiles import UserProfile
from intake_tracker.services.profile_intake import ProfileIntakeCalculator


class UserProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""

    def save_profile(self, profile: UserProfile) -> None:
        """Create or update a user profile."""


@dataclass
class UserProfileService:
    """Application service for biometric profiles."""

    repository: UserProfileRepository
    calculator: ProfileIntakeCalculator = field(default_factory=ProfileIntakeCalculator)

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return a user's profile or raise UserNotFoundError."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)
        return profile

    def update_profile(self, profile: UserProfile) -> UserProfile:
        """Persist a profile and return it."""
        self.repository.save_profile(profile)
        return profile

    def preview_targets(self, user_id: UUID) -> dict[str, float]:
        """Calculate daily targets without creating an intake record."""
        return self.calculator.calculate(self.get_profile(user_id))
