"""Pytest configuration and fixtures."""

import os

# Must be set before talkbuddy reads its settings
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "talkbuddy-test-secret-key-0123456789abcdef")

from collections.abc import Callable, Generator
from datetime import UTC, date, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import jwt
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from talkbuddy import models
from talkbuddy.application.learning.protocols.inference_service import (
    GeneratedProblem,
    GradedAnswer,
)
from talkbuddy.config import Settings, get_settings
from talkbuddy.core import container
from talkbuddy.database import Base, get_db
from talkbuddy.domain.identity.entities.user import User
from talkbuddy.infrastructure.identity.auth.token_service import ALGORITHM
from talkbuddy.infrastructure.identity.dependencies import get_current_user
from talkbuddy.infrastructure.identity.mappers.user_mapper import UserMapper
from talkbuddy.infrastructure.inference.inference_client import InferenceClient
from talkbuddy.main import app

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# A single shared connection so background threads see the same in-memory database
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def create_access_token(user_id: int, expires_in: timedelta | None = None) -> str:
    """Issue an access token the way the account service does."""
    expire = datetime.now(UTC) + (expires_in or timedelta(minutes=15))
    payload = {"sub": str(user_id), "exp": expire, "type": "access"}
    return jwt.encode(payload, get_settings().SECRET_KEY, algorithm=ALGORITHM)


def make_settings(**overrides: Any) -> Settings:
    """Settings for tests: in-memory database, progress updates applied inline."""
    values: dict[str, Any] = {
        "DATABASE_URL": TEST_DATABASE_URL,
        "ENVIRONMENT": "test",
        "PROGRESS_UPDATE_MODE": "sync",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    """Create a learner born in March 2016 with two interests."""
    user = models.User(
        id=1,
        email="learner@test.com",
        birth_date=date(2016, 3, 14),
        interests=["dinosaurs", "space"],
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def create_problem(db_session: Session) -> Callable[..., models.Problem]:
    """Factory for problems stored directly in the database."""

    def factory(
        problem_id: str = "problem-1",
        user_id: int = 1,
        question: str = "What is this animal called?",
        answer: Any = None,
    ) -> models.Problem:
        problem = models.Problem(
            id=problem_id,
            user_id=user_id,
            question=question,
            answer=answer if answer is not None else {"text": "a cat"},
        )
        db_session.add(problem)
        db_session.commit()
        db_session.refresh(problem)
        return problem

    return factory


@pytest.fixture
def create_attempt(db_session: Session) -> Callable[..., models.Attempt]:
    """Factory for attempts stored directly in the database."""

    def factory(
        problem_id: str = "problem-1",
        user_id: int = 1,
        is_correct: bool | None = True,
        feedback: str | None = None,
    ) -> models.Attempt:
        attempt = models.Attempt(
            problem_id=problem_id,
            user_id=user_id,
            is_correct=is_correct,
            feedback=feedback,
        )
        db_session.add(attempt)
        db_session.commit()
        db_session.refresh(attempt)
        return attempt

    return factory


@pytest.fixture
def fake_inference() -> MagicMock:
    """Inference service double with canned successful responses."""
    fake = MagicMock(spec=InferenceClient)
    fake.generate_problem = AsyncMock(
        return_value=GeneratedProblem(
            id="generated-1",
            question="What colour is the sky?",
            answer={"text": "blue"},
            image="https://cdn.test/sky.png",
            image_path="images/sky.png",
            whole_text="The sky is blue.",
        )
    )
    fake.generate_feedback = AsyncMock(
        return_value=GradedAnswer(
            is_correct=True,
            feedback="Great pronunciation!",
            voice_path="voices/answer.webm",
            raw={
                "is_correct": True,
                "feedback": "Great pronunciation!",
                "voice_path": "voices/answer.webm",
            },
        )
    )
    fake.close = AsyncMock()
    return fake


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(
    db_session: Session,
    test_user: models.User,
    fake_inference: MagicMock,
    test_settings: Settings,
) -> Generator[TestClient, Any, None]:
    """Create a test client authenticated as the test user."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    def override_get_current_user() -> User:
        return UserMapper().to_domain(db_session.get(models.User, test_user.id))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user
    container.settings.override(providers.Object(test_settings))
    container.session_factory.override(providers.Object(TestSessionLocal))
    container.inference_service.override(providers.Object(fake_inference))

    with TestClient(app) as test_client:
        yield test_client

    container.inference_service.reset_override()
    container.session_factory.reset_override()
    container.settings.reset_override()
    app.dependency_overrides.clear()
