"""Tests for problem generation API endpoints."""

from collections.abc import Callable
from datetime import UTC, date, datetime
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest
from dependency_injector import providers
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from talkbuddy import models
from talkbuddy.application.learning.protocols.inference_service import LearnerProfile
from talkbuddy.application.learning.use_cases.generate_problem_use_case import (
    GenerateProblemUseCase,
)
from talkbuddy.application.progress.use_cases.evaluate_achievement_use_case import (
    EvaluateAchievementUseCase,
)
from talkbuddy.core import container
from talkbuddy.domain.common.value_objects import UserId
from talkbuddy.domain.identity.entities.user import User
from talkbuddy.exceptions import UpstreamServiceError
from talkbuddy.infrastructure.identity.dependencies import get_current_user
from talkbuddy.infrastructure.identity.repositories.user_repository import UserRepository
from talkbuddy.infrastructure.learning.repositories import AttemptRepository, ProblemRepository
from talkbuddy.infrastructure.progress.repositories import AchievementRepository
from talkbuddy.main import app
from tests.conftest import make_settings

PROBLEMS_URL = "/api/v1/chat/problems"


def sent_profile(fake_inference: MagicMock) -> LearnerProfile:
    fake_inference.generate_problem.assert_awaited_once()
    return fake_inference.generate_problem.await_args.args[0]


class TestGenerateProblem:
    """Test suite for POST /api/v1/chat/problems."""

    def test_generate_problem_success(
        self, client: TestClient, db_session: Session, fake_inference: MagicMock
    ) -> None:
        """The client gets id, question and image; the answer stays on the server."""
        response = client.post(PROBLEMS_URL)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {
            "problemId": "generated-1",
            "question": "What colour is the sky?",
            "image": "https://cdn.test/sky.png",
        }
        assert "answer" not in response.text

        stored = db_session.get(models.Problem, "generated-1")
        assert stored is not None
        assert stored.user_id == 1
        assert stored.answer == {"text": "blue"}
        assert stored.image_path == "images/sky.png"
        assert stored.whole_text == "The sky is blue."

    def test_profile_without_attempts(
        self, client: TestClient, fake_inference: MagicMock
    ) -> None:
        """A learner with no attempts is sent with accuracy exactly 0."""
        client.post(PROBLEMS_URL)

        profile = sent_profile(fake_inference)
        today = datetime.now(UTC).date()
        assert profile.accuracy == 0.0
        assert profile.age_months == (today.year - 2016) * 12 + (today.month - 3)
        assert profile.interests == "dinosaurs, space"
        assert profile.language_level == "beginner"
        assert profile.feedback_history == []

    def test_profile_reflects_recent_attempts(
        self,
        client: TestClient,
        fake_inference: MagicMock,
        create_problem: Callable[..., models.Problem],
        create_attempt: Callable[..., models.Attempt],
    ) -> None:
        create_problem()
        create_attempt(is_correct=True, feedback="Good job")
        create_attempt(is_correct=False, feedback="Try again")
        create_attempt(is_correct=True, feedback=None)

        client.post(PROBLEMS_URL)

        profile = sent_profile(fake_inference)
        assert profile.accuracy == pytest.approx(2 / 3)
        assert profile.feedback_history == ["Try again", "Good job"]

    def test_accuracy_uses_history_window(
        self,
        client: TestClient,
        fake_inference: MagicMock,
        create_problem: Callable[..., models.Problem],
        create_attempt: Callable[..., models.Attempt],
    ) -> None:
        """Only the newest ACCURACY_HISTORY_LIMIT attempts count."""
        create_problem()
        create_attempt(is_correct=False)
        create_attempt(is_correct=False)
        create_attempt(is_correct=True)
        create_attempt(is_correct=True)

        with container.settings.override(providers.Object(make_settings(ACCURACY_HISTORY_LIMIT=2))):
            client.post(PROBLEMS_URL)

        assert sent_profile(fake_inference).accuracy == 1.0

    def test_full_history_mode(
        self,
        client: TestClient,
        fake_inference: MagicMock,
        create_problem: Callable[..., models.Problem],
        create_attempt: Callable[..., models.Attempt],
    ) -> None:
        create_problem()
        create_attempt(is_correct=False)
        create_attempt(is_correct=False)
        create_attempt(is_correct=True)
        create_attempt(is_correct=True)

        settings = make_settings(ACCURACY_HISTORY_MODE="full", ACCURACY_HISTORY_LIMIT=2)
        with container.settings.override(providers.Object(settings)):
            client.post(PROBLEMS_URL)

        assert sent_profile(fake_inference).accuracy == 0.5

    def test_evaluates_achievement_before_generating(
        self, client: TestClient, db_session: Session
    ) -> None:
        """In the default mode the current accuracy is recorded as an achievement."""
        client.post(PROBLEMS_URL)

        achievement = db_session.execute(select(models.Achievement)).scalar_one()
        assert achievement.level == 0.0
        assert achievement.title == "Best accuracy 0.00%"

    def test_achievement_evaluation_disabled(
        self, client: TestClient, db_session: Session
    ) -> None:
        settings = make_settings(ACHIEVEMENT_EVALUATION_MODE="disabled")
        with container.settings.override(providers.Object(settings)):
            response = client.post(PROBLEMS_URL)

        assert response.status_code == status.HTTP_201_CREATED
        count = db_session.execute(select(func.count(models.Achievement.id))).scalar_one()
        assert count == 0

    def test_unknown_user(self, client: TestClient, fake_inference: MagicMock) -> None:
        """A token for a user that no longer exists yields 404 and no upstream call."""
        app.dependency_overrides[get_current_user] = lambda: User(
            id=UserId(999), email="ghost@test.com", birth_date=date(2010, 1, 1)
        )

        response = client.post(PROBLEMS_URL)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "not found" in response.json()["detail"].lower()
        fake_inference.generate_problem.assert_not_awaited()

    def test_upstream_failure(
        self, client: TestClient, db_session: Session, fake_inference: MagicMock
    ) -> None:
        """An inference failure surfaces as 502 with the upstream message."""
        fake_inference.generate_problem.side_effect = UpstreamServiceError(
            "model overloaded", operation="generate_problem", upstream_status=503
        )

        response = client.post(PROBLEMS_URL)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json() == {"detail": "model overloaded"}
        count = db_session.execute(select(func.count(models.Problem.id))).scalar_one()
        assert count == 0

    def test_problem_id_owned_by_another_user(
        self,
        client: TestClient,
        db_session: Session,
        create_problem: Callable[..., models.Problem],
        create_attempt: Callable[..., models.Attempt],
    ) -> None:
        """An upstream id that collides with another learner's problem is refused."""
        other_user = models.User(id=2, email="other@test.com", birth_date=date(2015, 1, 1))
        db_session.add(other_user)
        db_session.commit()
        create_problem(problem_id="generated-1", user_id=2, question="Whose egg is this?")
        create_attempt(problem_id="generated-1", user_id=2)

        response = client.post(PROBLEMS_URL)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert "another user" in response.json()["detail"]
        db_session.expire_all()
        stored = db_session.get(models.Problem, "generated-1")
        assert stored is not None
        assert stored.user_id == 2
        assert stored.question == "Whose egg is this?"

    def test_repeated_id_for_same_user_overwrites(
        self,
        client: TestClient,
        db_session: Session,
        create_problem: Callable[..., models.Problem],
    ) -> None:
        create_problem(problem_id="generated-1", question="Old question?")

        response = client.post(PROBLEMS_URL)

        assert response.status_code == status.HTTP_201_CREATED
        db_session.expire_all()
        stored = db_session.get(models.Problem, "generated-1")
        assert stored is not None
        assert stored.user_id == 1
        assert stored.question == "What colour is the sky?"

    def test_unexpected_error_is_500(
        self, client: TestClient, fake_inference: MagicMock
    ) -> None:
        fake_inference.generate_problem.side_effect = RuntimeError("boom")

        response = client.post(PROBLEMS_URL)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "boom" not in response.json()["detail"]


class TestLearnerAge:
    """Age in months follows the configured progress timezone."""

    @pytest.mark.asyncio
    async def test_age_uses_progress_timezone(
        self, db_session: Session, test_user: models.User, fake_inference: MagicMock
    ) -> None:
        """Late on March 31 in UTC is already April 1 in Tokyo."""
        use_case = GenerateProblemUseCase(
            user_repository=UserRepository(db=db_session),
            attempt_repository=AttemptRepository(db=db_session),
            problem_repository=ProblemRepository(db=db_session),
            inference_service=fake_inference,
            evaluate_achievement_use_case=EvaluateAchievementUseCase(
                achievement_repository=AchievementRepository(db=db_session),
            ),
            achievement_evaluation_mode="disabled",
            history_limit=20,
            language_level="beginner",
            timezone=ZoneInfo("Asia/Tokyo"),
            clock=lambda: datetime(2026, 3, 31, 20, 0, tzinfo=UTC),
        )

        await use_case.generate_problem(test_user.id)

        # Born March 2016: 120 months on March 31, 121 on April 1
        assert sent_profile(fake_inference).age_months == 121
