"""Session endpoints — bind the unread-count service to the signed-in user."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from nautic.application.use_cases.unread_counts import (
    UnreadCounts,
    UnreadCountService,
    format_badge,
)
from nautic.infrastructure.api.dependencies import get_unread_service

router = APIRouter(prefix="/session", tags=["session"])


class LoginBody(BaseModel):
    user_id: int


def _counts_out(user_id: int | None, counts: UnreadCounts) -> dict:
    return {
        "user_id": user_id,
        "messages": counts.messages,
        "requests": counts.requests,
        "total": counts.total,
        "badge": format_badge(counts.total),
    }


@router.post("")
async def login(
    body: LoginBody,
    service: UnreadCountService = Depends(get_unread_service),
):
    """Bind the counts to ``user_id`` and (re)start polling."""
    counts = await service.login(body.user_id)
    await service.start()
    return _counts_out(service.user_id, counts)


@router.delete("")
async def logout(service: UnreadCountService = Depends(get_unread_service)):
    """Unbind the user; counts and badges drop to zero."""
    await service.logout()
    return _counts_out(None, service.counts)


@router.get("/unread-counts")
async def current_counts(service: UnreadCountService = Depends(get_unread_service)):
    return _counts_out(service.user_id, service.counts)
