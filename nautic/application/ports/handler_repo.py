"""Port interface for handler (boat manager) lookups."""

from abc import ABC, abstractmethod
from collections.abc import Set

from nautic.domain.entities.handler import Handler


class HandlerRepository(ABC):
    @abstractmethod
    async def filter_to_handler_profile(self, user_ids: Set[int]) -> frozenset[int]:
        """Keep only the ids whose profile is boat manager."""
        ...

    @abstractmethod
    async def get_handlers_with_skill(
        self, handler_ids: Set[int], category_id: int
    ) -> frozenset[int]:
        """Subset of ``handler_ids`` that declared the service category."""
        ...

    @abstractmethod
    async def get_by_id(self, handler_id: int) -> Handler | None:
        ...
