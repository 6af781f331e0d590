from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("UserId must be non-negative")


@dataclass(frozen=True)
class ProblemId(EntityId):
    """Problem identifier, assigned by the inference service."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("ProblemId cannot be empty")


@dataclass(frozen=True)
class AttemptId(EntityId):
    """Strongly-typed attempt identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("AttemptId must be non-negative")

    @classmethod
    def generate(cls) -> "AttemptId":
        return cls(0)  # Database assigns real ID


@dataclass(frozen=True)
class ProgressBucketId(EntityId):
    """Strongly-typed progress bucket identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("ProgressBucketId must be non-negative")

    @classmethod
    def generate(cls) -> "ProgressBucketId":
        return cls(0)  # Database assigns real ID


@dataclass(frozen=True)
class AchievementId(EntityId):
    """Strongly-typed achievement identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("AchievementId must be non-negative")

    @classmethod
    def generate(cls) -> "AchievementId":
        return cls(0)  # Database assigns real ID
