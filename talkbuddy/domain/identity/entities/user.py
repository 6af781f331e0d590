"""User entity for identity management."""

from dataclasses import dataclass, field
from datetime import date, datetime

from talkbuddy.domain.common.entity import Entity
from talkbuddy.domain.common.exceptions import ValidationError
from talkbuddy.domain.common.value_objects.ids import UserId

# Domain constraints
MAX_EMAIL_LENGTH = 100


@dataclass
class User(Entity[UserId]):
    """
    User entity representing a learner.

    Business Rules:
    - Email must be non-empty and have reasonable length (max MAX_EMAIL_LENGTH chars)
    - Birth date cannot lie in the future relative to creation
    - Interests are free-form tags, blank tags are dropped
    """

    id: UserId
    email: str
    birth_date: date
    interests: list[str] = field(default_factory=list)
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.email:
            raise ValidationError("Email cannot be empty", field="email", value=self.email)
        if len(self.email) > MAX_EMAIL_LENGTH:
            raise ValidationError(
                "Email cannot exceed MAX_EMAIL_LENGTH characters", field="email", value=self.email
            )
        self.interests = [tag.strip() for tag in self.interests if tag and tag.strip()]

    def age_in_months(self, today: date) -> int:
        """
        Age in whole calendar months, ignoring the day of month.

        Args:
            today: Reference date

        Returns:
            Absolute month distance between the birth month and today's month
        """
        return abs(
            (today.year - self.birth_date.year) * 12 + (today.month - self.birth_date.month)
        )

    def interests_as_text(self) -> str:
        """Interest tags joined into a single comma separated string."""
        return ", ".join(self.interests)

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        email: str,
        birth_date: date,
        interests: list[str],
        created_at: datetime,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            email=email,
            birth_date=birth_date,
            interests=list(interests),
            created_at=created_at,
        )
