"""Protocol for ProgressBucket repository in progress context."""

from typing import Protocol

from talkbuddy.domain.common.value_objects import ProgressBucketId, UserId
from talkbuddy.domain.progress.entities.progress_bucket import ProgressBucket


class ProgressRepositoryProtocol(Protocol):
    """Protocol for ProgressBucket repository operations."""

    def find_latest_by_user(self, user_id: UserId) -> ProgressBucket | None:
        """
        Find the most recently created bucket of a user.

        Args:
            user_id: The user ID

        Returns:
            ProgressBucket entity if the user has any, None otherwise
        """
        ...

    def find_by_user(self, user_id: UserId, limit: int) -> list[ProgressBucket]:
        """
        Get a user's buckets, newest day first.

        Args:
            user_id: The user ID
            limit: Maximum number of buckets

        Returns:
            List of progress bucket entities
        """
        ...

    def increment(self, bucket_id: ProgressBucketId, is_correct: bool) -> ProgressBucket:
        """
        Atomically add one attempt to a bucket.

        Args:
            bucket_id: The bucket to update in place
            is_correct: Whether the correct counter is bumped as well

        Returns:
            The updated bucket
        """
        ...

    def open_bucket(self, bucket: ProgressBucket) -> ProgressBucket:
        """
        Insert a new bucket; if the user already has one for that day,
        overwrite its counts with the new bucket's counts.

        Args:
            bucket: Unsaved bucket entity

        Returns:
            The bucket stored for that user and day
        """
        ...
