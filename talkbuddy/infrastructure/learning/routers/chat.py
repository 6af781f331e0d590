"""API routes for problem generation and answer grading."""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from talkbuddy.application.learning.use_cases.generate_feedback_use_case import (
    GenerateFeedbackUseCase,
)
from talkbuddy.application.learning.use_cases.generate_problem_use_case import (
    GenerateProblemUseCase,
)
from talkbuddy.config import get_settings
from talkbuddy.core import container
from talkbuddy.domain.common.exceptions import DomainError
from talkbuddy.domain.identity.entities.user import User
from talkbuddy.exceptions import TalkbuddyError, ValidationError
from talkbuddy.infrastructure.common.di import inject_use_case
from talkbuddy.infrastructure.identity.dependencies import get_current_user
from talkbuddy.infrastructure.learning.schemas import FeedbackResponse, GeneratedProblemResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post(
    "/problems",
    response_model=GeneratedProblemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_problem(
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: GenerateProblemUseCase = Depends(
        inject_use_case(container.generate_problem_use_case)
    ),
) -> GeneratedProblemResponse:
    """
    Generate a new problem tailored to the current user.

    Returns:
        Problem ID, question and image; the expected answer stays on the server

    Raises:
        HTTPException: 404 if the user is unknown, 502 if the inference service fails
    """
    try:
        summary = await use_case.generate_problem(current_user.id.value)
        return GeneratedProblemResponse(
            problem_id=summary.problem_id,
            question=summary.question,
            image=summary.image,
        )
    except (TalkbuddyError, DomainError):
        raise
    except Exception as e:
        logger.error(
            "failed_to_generate_problem",
            user_id=current_user.id.value,
            error=str(e),
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/problems/{problem_id}/feedback",
    response_model=FeedbackResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
)
async def generate_feedback(
    problem_id: str,
    voice: Annotated[UploadFile, File(...)],
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: GenerateFeedbackUseCase = Depends(
        inject_use_case(container.generate_feedback_use_case)
    ),
) -> dict[str, Any]:
    """
    Grade a recorded answer to one of the current user's problems.

    Args:
        problem_id: ID of the problem being answered
        voice: Uploaded audio recording

    Returns:
        Grading payload as produced by the inference service

    Raises:
        HTTPException: 400 for an empty or oversized recording, 404 if the problem
            is unknown or owned by someone else, 502 if the inference service fails
    """
    max_bytes = get_settings().MAX_VOICE_UPLOAD_BYTES
    content = await voice.read(max_bytes + 1)
    if not content:
        raise ValidationError("Voice recording is empty")
    if len(content) > max_bytes:
        raise ValidationError(f"Voice recording too large (max {max_bytes} bytes)")

    try:
        return await use_case.generate_feedback(
            problem_id=problem_id,
            user_id=current_user.id.value,
            voice=content,
            filename=voice.filename or "voice",
        )
    except (TalkbuddyError, DomainError):
        raise
    except Exception as e:
        logger.error(
            "failed_to_generate_feedback",
            problem_id=problem_id,
            user_id=current_user.id.value,
            error=str(e),
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
