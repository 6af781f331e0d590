"""Tests for database engine setup."""

from collections.abc import Generator
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from talkbuddy import models
from talkbuddy.database import (
    Base,
    dispose_engine,
    get_engine,
    get_session_factory,
    initialize_database,
)
from tests.conftest import make_settings


@pytest.fixture
def file_session_factory(tmp_path: Path) -> Generator[sessionmaker[Session], None, None]:
    """Session factory for a SQLite database file."""
    settings = make_settings(DATABASE_URL=f"sqlite:///{tmp_path / 'talkbuddy.db'}")
    initialize_database(settings)
    Base.metadata.create_all(bind=get_engine())
    try:
        yield get_session_factory(settings)
    finally:
        dispose_engine()


class TestInitializeDatabase:
    """Test suite for engine and pool selection."""

    def test_in_memory_database_uses_single_connection(self) -> None:
        initialize_database(make_settings(DATABASE_URL="sqlite:///:memory:"))
        try:
            assert isinstance(get_engine().pool, StaticPool)
        finally:
            dispose_engine()

    def test_file_database_pools_connections(
        self, file_session_factory: sessionmaker[Session]
    ) -> None:
        assert not isinstance(get_engine().pool, StaticPool)

    def test_rollback_in_one_session_keeps_another_sessions_write(
        self, file_session_factory: sessionmaker[Session]
    ) -> None:
        """A worker rolling back must not discard a request's flushed changes."""
        request_session = file_session_factory()
        worker_session = file_session_factory()
        try:
            request_session.add(
                models.User(id=1, email="learner@test.com", birth_date=date(2016, 3, 14))
            )
            request_session.flush()

            worker_session.execute(select(models.User.id)).all()
            worker_session.rollback()

            request_session.commit()
        finally:
            worker_session.close()
            request_session.close()

        check = file_session_factory()
        try:
            assert check.get(models.User, 1) is not None
        finally:
            check.close()
