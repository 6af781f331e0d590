"""Pydantic schemas for the progress API."""

from talkbuddy.infrastructure.progress.schemas.progress_schemas import (
    Achievement,
    AchievementResponse,
    ProgressBucket,
    ProgressListResponse,
)

__all__ = ["Achievement", "AchievementResponse", "ProgressBucket", "ProgressListResponse"]
