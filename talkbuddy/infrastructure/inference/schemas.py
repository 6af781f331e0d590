"""Pydantic schemas for the inference service wire format."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserInfoPayload(BaseModel):
    """Learner profile as sent to /generate_problem."""

    model_config = ConfigDict(populate_by_name=True)

    age: int = Field(..., description="Age in months")
    accuracy: float = Field(..., ge=0.0, le=1.0, description="Recent answer accuracy")
    interests: str = Field(..., description="Comma separated interest tags")
    language_level: str = Field(..., serialization_alias="languageLevel")
    language_goals: str | None = Field(None, serialization_alias="languageGoals")
    feedback: Any = Field(None, description="Feedback history of recent attempts")


class GenerateProblemRequest(BaseModel):
    user_info: UserInfoPayload = Field(..., serialization_alias="userInfo")


class GeneratedProblemData(BaseModel):
    id: str
    question: str
    answer: Any = None
    image: str | None = None
    image_path: str | None = None
    whole_text: str | None = None


class GeneratedProblemEnvelope(BaseModel):
    data: GeneratedProblemData


class GradedAnswerData(BaseModel):
    """Grading result; older deployments name the stored recording 'saved_path'."""

    model_config = ConfigDict(extra="allow")

    is_correct: bool
    feedback: str
    voice_path: str | None = Field(
        None, validation_alias=AliasChoices("voice_path", "saved_path")
    )


class GradedAnswerEnvelope(BaseModel):
    data: GradedAnswerData
