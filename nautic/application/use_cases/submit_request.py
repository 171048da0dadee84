"""SubmitServiceRequestUseCase — create a request and assign its handler."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager, nullcontext
from dataclasses import dataclass
from datetime import date

from nautic.application.ports.category_repo import ServiceCategoryRepository
from nautic.application.ports.request_repo import ServiceRequestRepository
from nautic.application.use_cases.resolve_handler import ResolveHandlerUseCase
from nautic.domain.entities.service_request import ServiceRequest
from nautic.domain.errors import CategoryNotFound, DataStoreUnavailable
from nautic.domain.value_objects.assignment_context import (
    AssignmentContext,
    BoatContext,
    ClientContext,
)
from nautic.domain.value_objects.enums import RequestStatus, Urgency

logger = logging.getLogger(__name__)


@dataclass
class SubmitRequestCommand:
    client_id: int
    description: str
    category_id: int | None = None
    category_label: str | None = None
    boat_id: int | None = None
    urgency: Urgency = Urgency.NORMAL

    def context(self) -> AssignmentContext:
        if self.boat_id is not None:
            return BoatContext(boat_id=self.boat_id, client_id=self.client_id)
        return ClientContext(client_id=self.client_id)


@dataclass
class SubmissionResult:
    """Outcome of one submission."""

    request: ServiceRequest
    resolver_degraded: bool = False

    @property
    def assigned(self) -> bool:
        return self.request.is_assigned()


class SubmitServiceRequestUseCase:
    """Persists a new request; handler resolution can never block it."""

    def __init__(
        self,
        resolver: ResolveHandlerUseCase,
        request_repo: ServiceRequestRepository,
        category_repo: ServiceCategoryRepository,
        today: Callable[[], date] = date.today,
        resolution_scope: Callable[[], AbstractAsyncContextManager] = nullcontext,
    ):
        self._resolver = resolver
        self._requests = request_repo
        self._categories = category_repo
        self._today = today
        # Unit of work around the resolver reads; the SQL wiring passes a
        # savepoint so a failed read leaves the transaction usable for save().
        self._resolution_scope = resolution_scope

    async def execute(self, command: SubmitRequestCommand) -> SubmissionResult:
        """Validate, resolve the handler, then save with status ``submitted``.

        Raises:
            ValueError: blank description or no category given.
            CategoryNotFound: ``category_label`` matches no category.
        """
        description = (command.description or "").strip()
        if not description:
            raise ValueError("Description must not be empty")

        category_id = await self._category_id(command)

        degraded = False
        try:
            async with self._resolution_scope():
                handler_id = await self._resolver.execute(command.context(), category_id)
        except DataStoreUnavailable:
            logger.warning(
                "Handler resolution failed for client %d, saving request unassigned",
                command.client_id, exc_info=True,
            )
            handler_id = None
            degraded = True

        request = ServiceRequest(
            id=None,
            client_id=command.client_id,
            category_id=category_id,
            description=description,
            request_date=self._today(),
            boat_id=command.boat_id,
            handler_id=handler_id,
            urgency=command.urgency,
            status=RequestStatus.SUBMITTED,
        )
        request = await self._requests.save(request)

        logger.info(
            "Request %s created for client %d, handler %s",
            request.id, command.client_id, handler_id,
        )
        return SubmissionResult(request=request, resolver_degraded=degraded)

    async def _category_id(self, command: SubmitRequestCommand) -> int:
        if command.category_id is not None:
            return command.category_id
        if not command.category_label:
            raise ValueError("Either category_id or category_label is required")

        category = await self._categories.get_by_label(command.category_label)
        if category is None:
            raise CategoryNotFound(command.category_label)
        return category.id
