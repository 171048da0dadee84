"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from nautic.adapters.persistence.database import get_session
from nautic.adapters.persistence.repositories import (
    SqlHandlerRepository,
    SqlPortRepository,
    SqlServiceCategoryRepository,
    SqlServiceRequestRepository,
    SqlUnreadRepository,
    savepoint,
)
from nautic.application.use_cases.resolve_handler import ResolveHandlerUseCase
from nautic.application.use_cases.submit_request import SubmitServiceRequestUseCase
from nautic.application.use_cases.unread_counts import UnreadCountService
from nautic.config import settings


def get_handler_repo(session: AsyncSession = Depends(get_session)) -> SqlHandlerRepository:
    return SqlHandlerRepository(session)


def get_request_repo(session: AsyncSession = Depends(get_session)) -> SqlServiceRequestRepository:
    return SqlServiceRequestRepository(session)


def get_unread_repo(session: AsyncSession = Depends(get_session)) -> SqlUnreadRepository:
    return SqlUnreadRepository(session)


def get_resolve_handler_uc(
    session: AsyncSession = Depends(get_session),
) -> ResolveHandlerUseCase:
    return ResolveHandlerUseCase(
        port_repo=SqlPortRepository(session),
        handler_repo=SqlHandlerRepository(session),
        request_repo=SqlServiceRequestRepository(session),
        strict_skill_filter=settings.strict_skill_filter,
    )


def get_submit_request_uc(
    session: AsyncSession = Depends(get_session),
) -> SubmitServiceRequestUseCase:
    request_repo = SqlServiceRequestRepository(session)
    resolver = ResolveHandlerUseCase(
        port_repo=SqlPortRepository(session),
        handler_repo=SqlHandlerRepository(session),
        request_repo=request_repo,
        strict_skill_filter=settings.strict_skill_filter,
    )
    return SubmitServiceRequestUseCase(
        resolver=resolver,
        request_repo=request_repo,
        category_repo=SqlServiceCategoryRepository(session),
        resolution_scope=lambda: savepoint(session),
    )


def get_unread_service(request: Request) -> UnreadCountService:
    """The process-wide unread-count service created by the app factory."""
    return request.app.state.unread_counts
