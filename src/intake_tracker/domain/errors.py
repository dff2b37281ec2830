"""Domain exceptions for the intake engine."""

from uuid import UUID


class IntakeTrackerError(Exception):
    """Base exception for intake engine errors."""


class MissingProfileDataError(IntakeTrackerError):
    """Raised when a profile lacks data needed for intake calculation."""

    def __init__(self, user_id: UUID, missing_fields: list[str]) -> None:
        super().__init__(
            f"User {user_id} is missing profile data: {', '.join(missing_fields)}"
        )
        self.user_id = user_id
        self.missing_fields = missing_fields


class EntityNotFoundError(IntakeTrackerError):
    """Raised when a lookup by identifier finds nothing."""

    entity = "Entity"

    def __init__(self, entity_id: object) -> None:
        super().__init__(f"{self.entity} not found: {entity_id}")
        self.entity_id = entity_id


class UserNotFoundError(EntityNotFoundError):
    entity = "User"


class MealNotFoundError(EntityNotFoundError):
    entity = "Meal"


class FoodItemNotFoundError(EntityNotFoundError):
    entity = "Food item"


class DietPlanNotFoundError(EntityNotFoundError):
    entity = "Diet plan"


class DietDayNotFoundError(EntityNotFoundError):
    entity = "Diet day"


class IntakeNotFoundError(EntityNotFoundError):
    """Raised when no intake record exists for a user and date."""

    entity = "Recommended daily intake"

    def __init__(self, user_id: UUID, day: object) -> None:
        super().__init__(f"user {user_id} on {day}")
        self.user_id = user_id
        self.day = day


class ConcurrentUpdateConflict(IntakeTrackerError):
    """Raised when an intake record changed between read and write.

    The caller should re-run the whole operation with a fresh read.
    """

    def __init__(self, intake_id: UUID) -> None:
        super().__init__(f"Intake {intake_id} was modified concurrently")
        self.intake_id = intake_id
