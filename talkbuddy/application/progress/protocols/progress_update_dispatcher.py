from typing import Protocol

from talkbuddy.domain.common.value_objects import UserId


class ProgressUpdateDispatcherProtocol(Protocol):
    async def dispatch(self, user_id: UserId, is_correct: bool) -> None:
        """Apply or schedule the progress update that follows a graded attempt."""
        ...
