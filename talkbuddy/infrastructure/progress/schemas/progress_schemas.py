"""Pydantic schemas for progress and achievement responses."""

import datetime as dt

from pydantic import BaseModel, Field


class ProgressBucket(BaseModel):
    """Schema for one day of progress."""

    id: int
    day: dt.date
    correct_count: int
    total_count: int
    accuracy: float = Field(..., ge=0.0, le=1.0)


class ProgressListResponse(BaseModel):
    buckets: list[ProgressBucket] = Field(..., description="Progress buckets, newest first")


class Achievement(BaseModel):
    """Schema for the best-accuracy achievement."""

    id: int
    title: str
    description: str
    level: float = Field(..., ge=0.0, le=1.0)
    criterion: str


class AchievementResponse(BaseModel):
    achievement: Achievement | None = Field(
        None, description="Best-accuracy achievement, null until one is earned"
    )
