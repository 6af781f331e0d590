"""Pydantic schemas for the learning API."""

from talkbuddy.infrastructure.learning.schemas.chat_schemas import (
    FeedbackResponse,
    GeneratedProblemResponse,
)

__all__ = ["FeedbackResponse", "GeneratedProblemResponse"]
