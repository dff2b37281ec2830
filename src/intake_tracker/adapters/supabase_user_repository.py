"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from intake_tracker.domain.profiles import ActivityLevel, Gender, Goal, UserProfile
from intake_tracker.services.users import UserProfileRepository


@dataclass
class SupabaseUserProfileRepository(UserProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""
        response = (
            self.client.table("user_profiles")
            .select("user_id, weight_kg, height_cm, age, gender, activity_level, goal")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserProfile(
            user_id=UUID(row["user_id"]),
            weight_kg=row.get("weight_kg"),
            height_cm=row.get("height_cm"),
            age=row.get("age"),
            gender=Gender(row["gender"]) if row.get("gender") else None,
            activity_level=ActivityLevel(row["activity_level"])
            if row.get("activity_level")
            else None,
            goal=Goal(row["goal"]) if row.get("goal") else None,
        )

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or update the profile row for a user."""
        self.client.table("user_profiles").upsert(
            {
                "user_id": str(profile.user_id),
                "weight_kg": profile.weight_kg,
                "height_cm": profile.height_cm,
                "age": profile.age,
                "gender": profile.gender,
                "activity_level": profile.activity_level,
                "goal": profile.goal,
            }
        ).execute()
