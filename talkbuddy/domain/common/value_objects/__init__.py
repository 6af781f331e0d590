"""Common value objects shared across all domain modules."""

from .accuracy import AccuracyRate, OutcomeCounts
from .ids import (
    AchievementId,
    AttemptId,
    ProblemId,
    ProgressBucketId,
    UserId,
)

__all__ = [
    "AccuracyRate",
    "AchievementId",
    "AttemptId",
    "OutcomeCounts",
    "ProblemId",
    "ProgressBucketId",
    "UserId",
]
