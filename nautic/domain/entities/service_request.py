"""ServiceRequest entity — a client's request for work on a boat."""

from dataclasses import dataclass
from datetime import date

from nautic.domain.value_objects.enums import RequestStatus, Urgency


@dataclass
class ServiceRequest:
    id: int | None
    client_id: int
    category_id: int
    description: str
    request_date: date
    boat_id: int | None = None
    handler_id: int | None = None
    urgency: Urgency = Urgency.NORMAL
    status: RequestStatus = RequestStatus.SUBMITTED

    def is_assigned(self) -> bool:
        return self.handler_id is not None


@dataclass(frozen=True)
class HistoryRow:
    """One past request of a client, as read for history aggregation."""

    handler_id: int | None
    request_date: date | None
