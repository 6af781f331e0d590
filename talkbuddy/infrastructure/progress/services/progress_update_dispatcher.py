"""Runs the post-grading progress update inline or as a background task."""

import asyncio
from collections.abc import Callable
from typing import ClassVar, Literal

import structlog
from sqlalchemy.orm import Session

from talkbuddy.application.progress.use_cases.apply_attempt_outcome_use_case import (
    ApplyAttemptOutcomeUseCase,
)
from talkbuddy.domain.common.value_objects import UserId

logger = structlog.get_logger(__name__)

ProgressUpdateMode = Literal["background", "sync"]


class ProgressUpdateDispatcher:
    """
    Dispatch the progress update that follows a graded attempt.

    In "sync" mode the update runs on the request's database session before
    the grading response is returned, and its errors propagate to the caller.

    In "background" mode the update runs as an asyncio task on a fresh
    session, since the request session is closed once the response is sent.
    The caller never sees its outcome; completion and failure are logged.
    """

    # Shared across dispatcher instances so shutdown can wait for all of them
    _pending: ClassVar[set[asyncio.Task[None]]] = set()

    def __init__(
        self,
        mode: ProgressUpdateMode,
        apply_attempt_outcome_use_case: ApplyAttemptOutcomeUseCase,
        session_factory: Callable[[], Session],
        use_case_factory: Callable[[Session], ApplyAttemptOutcomeUseCase],
    ) -> None:
        self.mode = mode
        self.apply_attempt_outcome_use_case = apply_attempt_outcome_use_case
        self.session_factory = session_factory
        self.use_case_factory = use_case_factory

    async def dispatch(self, user_id: UserId, is_correct: bool) -> None:
        """Apply or schedule the progress update that follows a graded attempt."""
        if self.mode == "sync":
            self.apply_attempt_outcome_use_case.apply(user_id.value, is_correct)
            return

        task = asyncio.create_task(
            asyncio.to_thread(self._apply_in_new_session, user_id.value, is_correct),
            name=f"progress-update-{user_id.value}",
        )
        self._pending.add(task)
        task.add_done_callback(self._on_done(user_id.value))

    def _apply_in_new_session(self, user_id: int, is_correct: bool) -> None:
        db = self.session_factory()
        try:
            self.use_case_factory(db).apply(user_id, is_correct)
        finally:
            db.close()

    def _on_done(self, user_id: int) -> Callable[[asyncio.Task[None]], None]:
        def callback(task: asyncio.Task[None]) -> None:
            self._pending.discard(task)
            if task.cancelled():
                logger.warning("progress_update_cancelled", user_id=user_id)
                return
            error = task.exception()
            if error is not None:
                logger.error(
                    "progress_update_failed",
                    user_id=user_id,
                    error=str(error),
                    exc_info=error,
                )
                return
            logger.info("progress_update_completed", user_id=user_id)

        return callback

    @classmethod
    async def drain(cls) -> None:
        """Wait for all scheduled background updates to finish."""
        if not cls._pending:
            return
        logger.info("draining_progress_updates", pending=len(cls._pending))
        await asyncio.gather(*cls._pending, return_exceptions=True)
