"""Accuracy value objects shared by the learning and progress modules."""

from collections.abc import Iterable
from dataclasses import dataclass

from ..exceptions import ValidationError
from ..value_object import ValueObject


@dataclass(frozen=True)
class OutcomeCounts(ValueObject):
    """Number of correct and total graded attempts."""

    correct: int
    total: int

    def __post_init__(self) -> None:
        if self.correct < 0 or self.total < 0:
            raise ValidationError("Attempt counts cannot be negative")
        if self.correct > self.total:
            raise ValidationError(
                "Correct count cannot exceed total count",
                field="correct",
                value=self.correct,
            )

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[bool | None]) -> "OutcomeCounts":
        """Count outcomes; ungraded (None) attempts count toward the total only."""
        correct = 0
        total = 0
        for is_correct in outcomes:
            total += 1
            if is_correct:
                correct += 1
        return cls(correct=correct, total=total)

    @property
    def accuracy(self) -> "AccuracyRate":
        return AccuracyRate.from_counts(self)


@dataclass(frozen=True)
class AccuracyRate(ValueObject):
    """Share of correct attempts, within [0, 1]."""

    value: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.value <= 1.0:
            raise ValidationError(
                "Accuracy rate must be within [0, 1]", field="accuracy", value=self.value
            )

    @classmethod
    def from_counts(cls, counts: OutcomeCounts) -> "AccuracyRate":
        """Accuracy of the given counts; exactly 0 when there are no attempts."""
        if counts.total == 0:
            return cls(0.0)
        return cls(counts.correct / counts.total)

    def as_percentage(self) -> str:
        """Render as a percentage with two decimals, e.g. '66.67%'."""
        return f"{self.value * 100:.2f}%"
