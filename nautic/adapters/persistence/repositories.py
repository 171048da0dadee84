"""SQLAlchemy repository implementations."""

from __future__ import annotations

import functools
from collections.abc import AsyncIterator, Iterable, Set
from contextlib import asynccontextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from nautic.adapters.persistence.models import (
    BoatModel,
    ConversationUnreadModel,
    ServiceCategoryModel,
    ServiceRequestModel,
    UserModel,
    user_ports,
    user_service_categories,
)
from nautic.application.ports.category_repo import ServiceCategoryRepository
from nautic.application.ports.handler_repo import HandlerRepository
from nautic.application.ports.port_repo import PortRepository
from nautic.application.ports.request_repo import ServiceRequestRepository
from nautic.application.ports.unread_repo import UnreadRepository
from nautic.domain.entities.handler import Handler
from nautic.domain.entities.service_category import ServiceCategory
from nautic.domain.entities.service_request import HistoryRow, ServiceRequest
from nautic.domain.errors import DataStoreUnavailable, ReferenceNotFound
from nautic.domain.value_objects.enums import Profile, RequestStatus


def _store_errors(method):
    """Re-raise driver and connection failures as DataStoreUnavailable.

    Foreign-key violations are caller mistakes and become ReferenceNotFound.
    """

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except IntegrityError as e:
            raise ReferenceNotFound(f"{type(self).__name__}.{method.__name__}: {e.orig}") from e
        except (SQLAlchemyError, OSError, TimeoutError) as e:
            raise DataStoreUnavailable(f"{type(self).__name__}.{method.__name__}: {e}") from e

    return wrapper


@asynccontextmanager
async def savepoint(session: AsyncSession) -> AsyncIterator[None]:
    """Run the block in a SAVEPOINT that is rolled back if the block fails.

    A failed statement aborts the whole PostgreSQL transaction; rolling back
    to the savepoint keeps the outer transaction usable for later writes.
    """
    try:
        async with session.begin_nested():
            yield
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        raise DataStoreUnavailable(f"savepoint: {e}") from e


# ─── Mappers ─────────────────────────────────────────────────────────


def _handler_to_domain(m: UserModel) -> Handler:
    return Handler(
        id=m.id,
        first_name=m.first_name,
        last_name=m.last_name,
        profile=Profile(m.profile),
        port_ids={p.id for p in m.ports},
        skill_ids={c.id for c in m.skills},
    )


def _category_to_domain(m: ServiceCategoryModel) -> ServiceCategory:
    return ServiceCategory(id=m.id, label=m.label)


# ─── Repositories ────────────────────────────────────────────────────


class SqlPortRepository(PortRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_store_errors
    async def get_ports_for_client(self, client_id: int) -> frozenset[int]:
        result = await self._s.execute(
            select(user_ports.c.port_id).where(user_ports.c.user_id == client_id)
        )
        return frozenset(result.scalars())

    @_store_errors
    async def get_ports_for_boat(self, boat_id: int) -> frozenset[int]:
        result = await self._s.execute(select(BoatModel.id_port).where(BoatModel.id == boat_id))
        port_id = result.scalar_one_or_none()
        return frozenset() if port_id is None else frozenset({port_id})

    @_store_errors
    async def get_handlers_for_ports(self, port_ids: Set[int]) -> frozenset[int]:
        if not port_ids:
            return frozenset()
        result = await self._s.execute(
            select(user_ports.c.user_id)
            .where(user_ports.c.port_id.in_(sorted(port_ids)))
            .distinct()
        )
        return frozenset(result.scalars())


class SqlHandlerRepository(HandlerRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_store_errors
    async def filter_to_handler_profile(self, user_ids: Set[int]) -> frozenset[int]:
        if not user_ids:
            return frozenset()
        result = await self._s.execute(
            select(UserModel.id).where(
                UserModel.id.in_(sorted(user_ids)),
                UserModel.profile == Profile.BOAT_MANAGER.value,
            )
        )
        return frozenset(result.scalars())

    @_store_errors
    async def get_handlers_with_skill(
        self, handler_ids: Set[int], category_id: int
    ) -> frozenset[int]:
        if not handler_ids:
            return frozenset()
        result = await self._s.execute(
            select(user_service_categories.c.user_id).where(
                user_service_categories.c.service_category_id == category_id,
                user_service_categories.c.user_id.in_(sorted(handler_ids)),
            )
        )
        return frozenset(result.scalars())

    @_store_errors
    async def get_by_id(self, handler_id: int) -> Handler | None:
        result = await self._s.execute(
            select(UserModel)
            .options(selectinload(UserModel.ports), selectinload(UserModel.skills))
            .where(UserModel.id == handler_id)
        )
        m = result.scalar_one_or_none()
        if m is None:
            return None
        handler = _handler_to_domain(m)
        return handler if handler.is_handler() else None


class SqlServiceRequestRepository(ServiceRequestRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_store_errors
    async def save(self, request: ServiceRequest) -> ServiceRequest:
        m = ServiceRequestModel(
            id_client=request.client_id,
            id_boat=request.boat_id,
            id_service=request.category_id,
            id_boat_manager=request.handler_id,
            description=request.description,
            urgency=request.urgency.value,
            status=request.status.value,
            request_date=request.request_date,
        )
        self._s.add(m)
        await self._s.flush()
        request.id = m.id
        return request

    @_store_errors
    async def get_client_request_history(
        self, client_id: int, handler_ids: Set[int]
    ) -> list[HistoryRow]:
        if not handler_ids:
            return []
        result = await self._s.execute(
            select(ServiceRequestModel.id_boat_manager, ServiceRequestModel.request_date).where(
                ServiceRequestModel.id_client == client_id,
                ServiceRequestModel.id_boat_manager.in_(sorted(handler_ids)),
            )
        )
        return [HistoryRow(handler_id=h, request_date=d) for h, d in result.all()]

    @_store_errors
    async def count_for_client(
        self, client_id: int, statuses: Iterable[RequestStatus]
    ) -> int:
        values = [s.value for s in statuses]
        if not values:
            return 0
        result = await self._s.execute(
            select(func.count(ServiceRequestModel.id)).where(
                ServiceRequestModel.id_client == client_id,
                ServiceRequestModel.status.in_(sorted(values)),
            )
        )
        return result.scalar_one()


class SqlServiceCategoryRepository(ServiceCategoryRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_store_errors
    async def get_by_label(self, label: str) -> ServiceCategory | None:
        result = await self._s.execute(
            select(ServiceCategoryModel)
            .where(func.lower(ServiceCategoryModel.label) == label.strip().lower())
            .order_by(ServiceCategoryModel.id)
            .limit(1)
        )
        m = result.scalar_one_or_none()
        return _category_to_domain(m) if m else None


class SqlUnreadRepository(UnreadRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_store_errors
    async def total_unread_messages(self, user_id: int) -> int:
        result = await self._s.execute(
            select(func.coalesce(func.sum(ConversationUnreadModel.unread_count), 0)).where(
                ConversationUnreadModel.user_id == user_id
            )
        )
        return int(result.scalar_one())
