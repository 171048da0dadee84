"""Port interface for service category lookups."""

from abc import ABC, abstractmethod

from nautic.domain.entities.service_category import ServiceCategory


class ServiceCategoryRepository(ABC):
    @abstractmethod
    async def get_by_label(self, label: str) -> ServiceCategory | None:
        """Case-insensitive exact match on the label."""
        ...
