"""Port interface for service request persistence."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Set

from nautic.domain.entities.service_request import HistoryRow, ServiceRequest
from nautic.domain.value_objects.enums import RequestStatus


class ServiceRequestRepository(ABC):
    @abstractmethod
    async def save(self, request: ServiceRequest) -> ServiceRequest:
        ...

    @abstractmethod
    async def get_client_request_history(
        self, client_id: int, handler_ids: Set[int]
    ) -> list[HistoryRow]:
        """Past requests of ``client_id`` assigned to one of ``handler_ids``."""
        ...

    @abstractmethod
    async def count_for_client(
        self, client_id: int, statuses: Iterable[RequestStatus]
    ) -> int:
        ...
