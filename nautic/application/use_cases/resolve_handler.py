"""ResolveHandlerUseCase — pick the boat manager for a new service request."""

from __future__ import annotations

import logging

from nautic.application.ports.handler_repo import HandlerRepository
from nautic.application.ports.port_repo import PortRepository
from nautic.application.ports.request_repo import ServiceRequestRepository
from nautic.domain.policies.handler_ranking import pick_best_handler
from nautic.domain.policies.history import HandlerStats, aggregate_history
from nautic.domain.policies.skill_filter import apply_skill_filter
from nautic.domain.value_objects.assignment_context import (
    AssignmentContext,
    BoatContext,
)

logger = logging.getLogger(__name__)


class EligibilityLookup:
    """Computes the handlers allowed to take a request."""

    def __init__(
        self,
        port_repo: PortRepository,
        handler_repo: HandlerRepository,
        strict_skill_filter: bool = False,
    ):
        self._ports = port_repo
        self._handlers = handler_repo
        self._strict = strict_skill_filter

    async def candidates(
        self,
        context: AssignmentContext,
        category_id: int | None = None,
    ) -> frozenset[int]:
        """Handlers sharing a port with the context, optionally skill-matched.

        Returns an empty set when the context has no port or nobody
        serving it is a boat manager.
        """
        if isinstance(context, BoatContext):
            port_ids = await self._ports.get_ports_for_boat(context.boat_id)
        else:
            port_ids = await self._ports.get_ports_for_client(context.client_id)
        if not port_ids:
            logger.info("No port attached to %s", context)
            return frozenset()

        port_users = await self._ports.get_handlers_for_ports(port_ids)
        if not port_users:
            return frozenset()

        handler_ids = await self._handlers.filter_to_handler_profile(port_users)
        if not handler_ids or category_id is None:
            return frozenset(handler_ids)

        skilled = await self._handlers.get_handlers_with_skill(handler_ids, category_id)
        eligible = apply_skill_filter(handler_ids, skilled, strict=self._strict)
        if not skilled:
            logger.info(
                "No handler declared category %d among %d candidates (strict=%s)",
                category_id, len(handler_ids), self._strict,
            )
        return eligible


class ResolveHandlerUseCase:
    """Orchestrates eligibility, history and ranking.

    Never raises for business outcomes: no port, no handler and no history
    all resolve to data. ``DataStoreUnavailable`` from the repositories is
    propagated untouched; callers must treat it as "leave unassigned".
    """

    def __init__(
        self,
        port_repo: PortRepository,
        handler_repo: HandlerRepository,
        request_repo: ServiceRequestRepository,
        strict_skill_filter: bool = False,
    ):
        self._eligibility = EligibilityLookup(port_repo, handler_repo, strict_skill_filter)
        self._requests = request_repo

    async def execute(
        self,
        context: AssignmentContext,
        category_id: int | None = None,
    ) -> int | None:
        """Return the id of the handler to assign, or None.

        Pipeline:
        1. Eligible handlers for the context's ports (and category)
        2. Client history restricted to those handlers
        3. Deterministic ranking
        """
        candidates = await self._eligibility.candidates(context, category_id)
        if not candidates:
            logger.info("No eligible handler for %s", context)
            return None

        if len(candidates) == 1:
            chosen = next(iter(candidates))
            logger.info("Single eligible handler %d for %s", chosen, context)
            return chosen

        stats = await self.history(context.client_id, candidates)
        chosen = pick_best_handler(candidates, stats)
        logger.info(
            "Handler %s chosen for %s among %d candidates (count=%d)",
            chosen, context, len(candidates), stats[chosen].count,
        )
        return chosen

    async def history(
        self, client_id: int, candidates: frozenset[int]
    ) -> dict[int, HandlerStats]:
        """Per-candidate statistics over ``client_id``'s own requests."""
        rows = await self._requests.get_client_request_history(client_id, candidates)
        return aggregate_history(candidates, rows)
