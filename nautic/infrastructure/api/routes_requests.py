"""Service request endpoints — submission and handler preview."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from nautic.adapters.persistence.database import get_session
from nautic.application.ports.handler_repo import HandlerRepository
from nautic.application.use_cases.resolve_handler import ResolveHandlerUseCase
from nautic.application.use_cases.submit_request import (
    SubmitRequestCommand,
    SubmitServiceRequestUseCase,
)
from nautic.application.use_cases.unread_counts import UnreadCountService
from nautic.domain.errors import CategoryNotFound, DataStoreUnavailable
from nautic.domain.value_objects.assignment_context import BoatContext, ClientContext
from nautic.domain.value_objects.enums import Urgency
from nautic.infrastructure.api.dependencies import (
    get_handler_repo,
    get_resolve_handler_uc,
    get_submit_request_uc,
    get_unread_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/requests", tags=["requests"])


class SubmitRequestBody(BaseModel):
    client_id: int
    description: str = Field(min_length=1)
    category_id: int | None = None
    category_label: str | None = None
    boat_id: int | None = None
    urgency: Urgency = Urgency.NORMAL


class ServiceRequestOut(BaseModel):
    id: int
    client_id: int
    boat_id: int | None
    category_id: int
    handler_id: int | None
    description: str
    urgency: Urgency
    status: str
    request_date: date
    resolver_degraded: bool = False


@router.post("", status_code=201, response_model=ServiceRequestOut)
async def submit_request(
    body: SubmitRequestBody,
    submit_uc: SubmitServiceRequestUseCase = Depends(get_submit_request_uc),
    session: AsyncSession = Depends(get_session),
    unread_counts: UnreadCountService = Depends(get_unread_service),
):
    """Create a service request and assign the best boat manager."""
    command = SubmitRequestCommand(
        client_id=body.client_id,
        description=body.description,
        category_id=body.category_id,
        category_label=body.category_label,
        boat_id=body.boat_id,
        urgency=body.urgency,
    )
    try:
        result = await submit_uc.execute(command)
        await session.commit()
    except CategoryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DataStoreUnavailable as e:
        logger.exception("Could not save service request for client %d", body.client_id)
        raise HTTPException(status_code=503, detail=str(e))

    r = result.request
    if unread_counts.user_id == r.client_id:
        await unread_counts.notify_changed()

    return ServiceRequestOut(
        id=r.id,
        client_id=r.client_id,
        boat_id=r.boat_id,
        category_id=r.category_id,
        handler_id=r.handler_id,
        description=r.description,
        urgency=r.urgency,
        status=r.status.value,
        request_date=r.request_date,
        resolver_degraded=result.resolver_degraded,
    )


@router.get("/resolve-handler")
async def preview_handler(
    client_id: int,
    boat_id: int | None = None,
    category_id: int | None = None,
    resolver: ResolveHandlerUseCase = Depends(get_resolve_handler_uc),
    handler_repo: HandlerRepository = Depends(get_handler_repo),
):
    """Which boat manager would a new request be assigned to right now."""
    if boat_id is not None:
        context = BoatContext(boat_id=boat_id, client_id=client_id)
    else:
        context = ClientContext(client_id=client_id)

    try:
        handler_id = await resolver.execute(context, category_id)
        handler = await handler_repo.get_by_id(handler_id) if handler_id is not None else None
    except DataStoreUnavailable:
        logger.warning("Handler preview degraded for client %d", client_id, exc_info=True)
        return {"handler_id": None, "handler_name": None, "degraded": True}

    return {
        "handler_id": handler_id,
        "handler_name": handler.full_name if handler else None,
        "degraded": False,
    }
