"""Use case for maintaining the daily progress bucket of a user."""

from datetime import date, tzinfo

import structlog

from talkbuddy.application.learning.protocols.attempt_repository import (
    AttemptRepositoryProtocol,
)
from talkbuddy.application.progress.protocols.progress_repository import (
    ProgressRepositoryProtocol,
)
from talkbuddy.domain.common.value_objects import UserId
from talkbuddy.domain.progress.entities.progress_bucket import ProgressBucket
from talkbuddy.utils import Clock, calendar_day, utc_now

logger = structlog.get_logger(__name__)


class RecordAttemptUseCase:
    """Fold one graded attempt into the user's progress bucket for today."""

    def __init__(
        self,
        progress_repository: ProgressRepositoryProtocol,
        attempt_repository: AttemptRepositoryProtocol,
        timezone: tzinfo,
        bootstrap_first_bucket: bool = False,
        clock: Clock = utc_now,
    ) -> None:
        self.progress_repository = progress_repository
        self.attempt_repository = attempt_repository
        self.timezone = timezone
        self.bootstrap_first_bucket = bootstrap_first_bucket
        self.clock = clock

    def record_attempt(self, user_id: int, is_correct: bool) -> ProgressBucket | None:
        """
        Update today's progress bucket after an attempt was graded.

        - Latest bucket is today's: counters are incremented in place.
        - Latest bucket is from an earlier day: a bucket for today is opened,
          seeded with the lifetime correct/total aggregate over all attempts
          (not the delta since the previous bucket).
        - No bucket at all: nothing is written unless first-bucket bootstrap
          is enabled, in which case today's bucket is opened the same way.

        Args:
            user_id: ID of the user
            is_correct: Outcome of the graded attempt

        Returns:
            The bucket that now represents today, or None if nothing was written
        """
        user_id_vo = UserId(user_id)
        today = calendar_day(self.clock(), self.timezone)

        latest = self.progress_repository.find_latest_by_user(user_id_vo)
        if latest is None:
            if not self.bootstrap_first_bucket:
                logger.info("progress_bucket_missing", user_id=user_id)
                return None
            return self._open_bucket(user_id_vo, today, reason="bootstrap")

        if latest.is_for_day(today):
            bucket = self.progress_repository.increment(latest.id, is_correct)
            logger.info(
                "progress_bucket_incremented",
                user_id=user_id,
                bucket_id=bucket.id.value,
                correct_count=bucket.correct_count,
                total_count=bucket.total_count,
            )
            return bucket

        return self._open_bucket(user_id_vo, today, reason="rollover")

    def _open_bucket(self, user_id: UserId, today: date, reason: str) -> ProgressBucket:
        lifetime = self.attempt_repository.count_outcomes(user_id)
        bucket = self.progress_repository.open_bucket(
            ProgressBucket.open(user_id=user_id, day=today, seed=lifetime)
        )
        logger.info(
            "progress_bucket_opened",
            user_id=user_id.value,
            bucket_id=bucket.id.value,
            day=today.isoformat(),
            reason=reason,
            correct_count=bucket.correct_count,
            total_count=bucket.total_count,
        )
        return bucket
