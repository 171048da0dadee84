"""User endpoints — unread counters for badges."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from nautic.application.ports.request_repo import ServiceRequestRepository
from nautic.application.ports.unread_repo import UnreadRepository
from nautic.application.use_cases.unread_counts import compute_counts, format_badge
from nautic.config import settings
from nautic.infrastructure.api.dependencies import get_request_repo, get_unread_repo

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/unread-counts")
async def unread_counts(
    user_id: int,
    unread_repo: UnreadRepository = Depends(get_unread_repo),
    request_repo: ServiceRequestRepository = Depends(get_request_repo),
):
    """Unread messages and open requests of a user, with badge labels."""
    counts = await compute_counts(user_id, unread_repo, request_repo, settings.open_statuses)
    return {
        "user_id": user_id,
        "messages": counts.messages,
        "requests": counts.requests,
        "total": counts.total,
        "badge": format_badge(counts.total),
        "messages_badge": format_badge(counts.messages),
        "requests_badge": format_badge(counts.requests),
    }
