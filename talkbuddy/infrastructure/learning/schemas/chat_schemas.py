"""Pydantic schemas for problem generation and grading responses."""

from pydantic import BaseModel, ConfigDict, Field


class GeneratedProblemResponse(BaseModel):
    """Schema for a generated problem; never carries the expected answer."""

    model_config = ConfigDict(populate_by_name=True)

    problem_id: str = Field(..., alias="problemId", description="Problem identifier")
    question: str = Field(..., description="Question text")
    image: str | None = Field(None, description="Illustration for the question")


class FeedbackResponse(BaseModel):
    """Schema for a graded answer, passed through from the inference service."""

    model_config = ConfigDict(extra="allow")

    is_correct: bool = Field(..., description="Whether the answer was correct")
    feedback: str = Field(..., description="Feedback text for the learner")
    voice_path: str | None = Field(None, description="Where the recording was stored")
