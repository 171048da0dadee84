"""Port interface for conversation unread counters."""

from abc import ABC, abstractmethod


class UnreadRepository(ABC):
    @abstractmethod
    async def total_unread_messages(self, user_id: int) -> int:
        """Sum of the per-conversation unread counters of the user."""
        ...
