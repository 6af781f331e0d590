"""ProgressBucket entity: per-user, per-calendar-day attempt aggregate."""

from dataclasses import dataclass
from datetime import date, datetime

from talkbuddy.domain.common.entity import Entity
from talkbuddy.domain.common.exceptions import ValidationError
from talkbuddy.domain.common.value_objects import (
    AccuracyRate,
    OutcomeCounts,
    ProgressBucketId,
    UserId,
)


@dataclass
class ProgressBucket(Entity[ProgressBucketId]):
    """
    Daily progress aggregate.

    Business Rules:
    - 0 <= correct_count <= total_count
    - At most one bucket per user and calendar day (enforced by the repository)
    - A bucket opened on day rollover is seeded with the lifetime aggregate
    """

    id: ProgressBucketId
    user_id: UserId
    day: date
    correct_count: int = 0
    total_count: int = 0
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.correct_count < 0 or self.total_count < 0:
            raise ValidationError("Progress counts cannot be negative")
        if self.correct_count > self.total_count:
            raise ValidationError(
                "Correct count cannot exceed total count",
                field="correct_count",
                value=self.correct_count,
            )

    def is_for_day(self, day: date) -> bool:
        return self.day == day

    @property
    def counts(self) -> OutcomeCounts:
        return OutcomeCounts(correct=self.correct_count, total=self.total_count)

    @property
    def accuracy(self) -> AccuracyRate:
        return AccuracyRate.from_counts(self.counts)

    @classmethod
    def open(cls, user_id: UserId, day: date, seed: OutcomeCounts) -> "ProgressBucket":
        """Open a new bucket for the given day, seeded with the given counts."""
        return cls(
            id=ProgressBucketId.generate(),
            user_id=user_id,
            day=day,
            correct_count=seed.correct,
            total_count=seed.total,
        )

    @classmethod
    def create_with_id(
        cls,
        id: ProgressBucketId,
        user_id: UserId,
        day: date,
        correct_count: int,
        total_count: int,
        created_at: datetime,
    ) -> "ProgressBucket":
        """Reconstitute a bucket from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            day=day,
            correct_count=correct_count,
            total_count=total_count,
            created_at=created_at,
        )
