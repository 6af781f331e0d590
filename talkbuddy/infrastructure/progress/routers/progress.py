"""API routes for progress history and achievements."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from talkbuddy.application.progress.use_cases.progress_query_use_case import (
    ProgressQueryUseCase,
)
from talkbuddy.core import container
from talkbuddy.domain.identity.entities.user import User
from talkbuddy.infrastructure.common.di import inject_use_case
from talkbuddy.infrastructure.identity.dependencies import get_current_user
from talkbuddy.infrastructure.progress.schemas import (
    Achievement,
    AchievementResponse,
    ProgressBucket,
    ProgressListResponse,
)

router = APIRouter(tags=["progress"])


@router.get("/progress", response_model=ProgressListResponse, status_code=status.HTTP_200_OK)
def list_progress(
    current_user: Annotated[User, Depends(get_current_user)],
    limit: Annotated[int, Query(ge=1, le=366)] = 30,
    use_case: ProgressQueryUseCase = Depends(inject_use_case(container.progress_query_use_case)),
) -> ProgressListResponse:
    """List the current user's daily progress buckets, newest first."""
    buckets = use_case.get_buckets(current_user.id.value, limit=limit)
    return ProgressListResponse(
        buckets=[
            ProgressBucket(
                id=bucket.id.value,
                day=bucket.day,
                correct_count=bucket.correct_count,
                total_count=bucket.total_count,
                accuracy=bucket.accuracy.value,
            )
            for bucket in buckets
        ]
    )


@router.get("/achievements", response_model=AchievementResponse, status_code=status.HTTP_200_OK)
def get_achievement(
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: ProgressQueryUseCase = Depends(inject_use_case(container.progress_query_use_case)),
) -> AchievementResponse:
    """Get the current user's best-accuracy achievement."""
    achievement = use_case.get_accuracy_achievement(current_user.id.value)
    if achievement is None:
        return AchievementResponse(achievement=None)
    return AchievementResponse(
        achievement=Achievement(
            id=achievement.id.value,
            title=achievement.title,
            description=achievement.description,
            level=achievement.level,
            criterion=achievement.criterion,
        )
    )
