from functools import partial

from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from talkbuddy.application.learning.use_cases.generate_feedback_use_case import (
    GenerateFeedbackUseCase,
)
from talkbuddy.application.learning.use_cases.generate_problem_use_case import (
    GenerateProblemUseCase,
)
from talkbuddy.application.progress.use_cases.apply_attempt_outcome_use_case import (
    ApplyAttemptOutcomeUseCase,
)
from talkbuddy.application.progress.use_cases.evaluate_achievement_use_case import (
    EvaluateAchievementUseCase,
)
from talkbuddy.application.progress.use_cases.progress_query_use_case import (
    ProgressQueryUseCase,
)
from talkbuddy.application.progress.use_cases.record_attempt_use_case import (
    RecordAttemptUseCase,
)
from talkbuddy.config import Settings, get_settings
from talkbuddy.database import get_session_factory
from talkbuddy.infrastructure.identity.repositories.user_repository import UserRepository
from talkbuddy.infrastructure.inference.inference_client import InferenceClient
from talkbuddy.infrastructure.learning.repositories import AttemptRepository, ProblemRepository
from talkbuddy.infrastructure.progress.repositories import (
    AchievementRepository,
    ProgressRepository,
)
from talkbuddy.infrastructure.progress.services.progress_update_dispatcher import (
    ProgressUpdateDispatcher,
)


def build_apply_attempt_outcome_use_case(
    db: Session, settings: Settings
) -> ApplyAttemptOutcomeUseCase:
    """
    Wire the post-grading update against a given session.

    Used both for the request-scoped session and for the fresh sessions the
    background dispatcher opens.
    """
    attempt_repository = AttemptRepository(db=db)
    return ApplyAttemptOutcomeUseCase(
        record_attempt_use_case=RecordAttemptUseCase(
            progress_repository=ProgressRepository(db=db),
            attempt_repository=attempt_repository,
            timezone=settings.progress_timezone,
            bootstrap_first_bucket=settings.PROGRESS_BOOTSTRAP_FIRST_BUCKET,
        ),
        evaluate_achievement_use_case=EvaluateAchievementUseCase(
            achievement_repository=AchievementRepository(db=db),
        ),
        attempt_repository=attempt_repository,
        evaluate_achievement=settings.ACHIEVEMENT_EVALUATION_MODE == "feedback",
        history_limit=settings.accuracy_history_limit,
    )


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Callable(get_settings)

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)
    session_factory = providers.Callable(get_session_factory, settings=settings)

    # External services
    inference_service = providers.Singleton(
        InferenceClient,
        base_url=settings.provided.INFERENCE_SERVICE_URL,
        path_prefix=settings.provided.INFERENCE_PATH_PREFIX,
        timeout=settings.provided.INFERENCE_TIMEOUT_SECONDS,
    )

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    problem_repository = providers.Factory(ProblemRepository, db=db)
    attempt_repository = providers.Factory(AttemptRepository, db=db)
    progress_repository = providers.Factory(ProgressRepository, db=db)
    achievement_repository = providers.Factory(AchievementRepository, db=db)

    # Progress module use cases
    evaluate_achievement_use_case = providers.Factory(
        EvaluateAchievementUseCase,
        achievement_repository=achievement_repository,
    )
    apply_attempt_outcome_use_case = providers.Factory(
        build_apply_attempt_outcome_use_case,
        db=db,
        settings=settings,
    )
    progress_update_dispatcher = providers.Factory(
        ProgressUpdateDispatcher,
        mode=settings.provided.PROGRESS_UPDATE_MODE,
        apply_attempt_outcome_use_case=apply_attempt_outcome_use_case,
        session_factory=session_factory,
        use_case_factory=providers.Factory(
            partial, build_apply_attempt_outcome_use_case, settings=settings
        ),
    )
    progress_query_use_case = providers.Factory(
        ProgressQueryUseCase,
        progress_repository=progress_repository,
        achievement_repository=achievement_repository,
    )

    # Learning module use cases
    generate_problem_use_case = providers.Factory(
        GenerateProblemUseCase,
        user_repository=user_repository,
        attempt_repository=attempt_repository,
        problem_repository=problem_repository,
        inference_service=inference_service,
        evaluate_achievement_use_case=evaluate_achievement_use_case,
        achievement_evaluation_mode=settings.provided.ACHIEVEMENT_EVALUATION_MODE,
        history_limit=settings.provided.accuracy_history_limit,
        language_level=settings.provided.DEFAULT_LANGUAGE_LEVEL,
        timezone=settings.provided.progress_timezone,
    )
    generate_feedback_use_case = providers.Factory(
        GenerateFeedbackUseCase,
        problem_repository=problem_repository,
        attempt_repository=attempt_repository,
        inference_service=inference_service,
        progress_dispatcher=progress_update_dispatcher,
    )


# Initialize container
container = Container()
