"""Pytest configuration and shared fixtures.

The fakes below implement the repository ports over a single in-memory
store so tests can describe a port/handler/request layout directly.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date

import pytest

from nautic.application.ports.category_repo import ServiceCategoryRepository
from nautic.application.ports.handler_repo import HandlerRepository
from nautic.application.ports.port_repo import PortRepository
from nautic.application.ports.request_repo import ServiceRequestRepository
from nautic.application.ports.unread_repo import UnreadRepository
from nautic.application.use_cases.resolve_handler import ResolveHandlerUseCase
from nautic.application.use_cases.submit_request import SubmitServiceRequestUseCase
from nautic.domain.entities.handler import Handler
from nautic.domain.entities.service_category import ServiceCategory
from nautic.domain.entities.service_request import HistoryRow, ServiceRequest
from nautic.domain.errors import DataStoreUnavailable
from nautic.domain.value_objects.enums import Profile, RequestStatus

TODAY = date(2024, 7, 1)


class InMemoryStore:
    def __init__(self):
        self.profiles: dict[int, Profile] = {}
        self.user_ports: dict[int, set[int]] = {}
        self.boats: dict[int, tuple[int, int | None]] = {}
        self.skills: dict[int, set[int]] = {}
        self.categories: dict[int, ServiceCategory] = {}
        self.requests: list[ServiceRequest] = []
        self.unreads: dict[tuple[int, int], int] = {}
        self.unavailable = False
        # Calls that fail once and leave the transaction aborted, the way a
        # PostgreSQL statement timeout does, until a savepoint rolls it back.
        self.fail_calls: set[str] = set()
        self.aborted = False
        self.savepoints = 0
        self.calls: list[str] = []

    # ─── builders ────────────────────────────────────────────────

    def add_client(self, client_id: int, ports=()):
        self.profiles[client_id] = Profile.PLEASURE_BOATER
        self.user_ports[client_id] = set(ports)

    def add_handler(self, handler_id: int, ports=(), skills=(), profile=Profile.BOAT_MANAGER):
        self.profiles[handler_id] = profile
        self.user_ports[handler_id] = set(ports)
        self.skills[handler_id] = set(skills)

    def add_boat(self, boat_id: int, owner_id: int, port_id: int | None):
        self.boats[boat_id] = (owner_id, port_id)

    def add_category(self, category_id: int, label: str):
        self.categories[category_id] = ServiceCategory(id=category_id, label=label)

    def add_request(self, client_id, handler_id, request_date, status=RequestStatus.COMPLETED):
        self.requests.append(
            ServiceRequest(
                id=len(self.requests) + 1,
                client_id=client_id,
                category_id=1,
                description="history",
                request_date=request_date,
                handler_id=handler_id,
                status=status,
            )
        )

    def check(self, name: str):
        self.calls.append(name)
        if self.unavailable:
            raise DataStoreUnavailable(f"{name}: store unreachable")
        if self.aborted:
            raise DataStoreUnavailable(f"{name}: current transaction is aborted")
        if name in self.fail_calls:
            self.fail_calls.discard(name)
            self.aborted = True
            raise DataStoreUnavailable(f"{name}: canceling statement due to statement timeout")

    @asynccontextmanager
    async def savepoint(self):
        self.savepoints += 1
        try:
            yield
        except DataStoreUnavailable:
            self.aborted = False
            raise


class FakePortRepo(PortRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_ports_for_client(self, client_id):
        self._store.check("get_ports_for_client")
        return frozenset(self._store.user_ports.get(client_id, ()))

    async def get_ports_for_boat(self, boat_id):
        self._store.check("get_ports_for_boat")
        _, port_id = self._store.boats.get(boat_id, (None, None))
        return frozenset() if port_id is None else frozenset({port_id})

    async def get_handlers_for_ports(self, port_ids):
        self._store.check("get_handlers_for_ports")
        return frozenset(
            uid for uid, ports in self._store.user_ports.items() if ports & set(port_ids)
        )


class FakeHandlerRepo(HandlerRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def filter_to_handler_profile(self, user_ids):
        self._store.check("filter_to_handler_profile")
        return frozenset(
            uid for uid in user_ids if self._store.profiles.get(uid) == Profile.BOAT_MANAGER
        )

    async def get_handlers_with_skill(self, handler_ids, category_id):
        self._store.check("get_handlers_with_skill")
        return frozenset(
            hid for hid in handler_ids if category_id in self._store.skills.get(hid, set())
        )

    async def get_by_id(self, handler_id):
        self._store.check("get_handler_by_id")
        if handler_id not in self._store.profiles:
            return None
        handler = Handler(
            id=handler_id,
            first_name="Handler",
            last_name=str(handler_id),
            profile=self._store.profiles[handler_id],
            port_ids=set(self._store.user_ports.get(handler_id, ())),
            skill_ids=set(self._store.skills.get(handler_id, ())),
        )
        return handler if handler.is_handler() else None


class FakeRequestRepo(ServiceRequestRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def save(self, request):
        self._store.check("save_request")
        request.id = len(self._store.requests) + 1
        self._store.requests.append(request)
        return request

    async def get_client_request_history(self, client_id, handler_ids):
        self._store.check("get_client_request_history")
        return [
            HistoryRow(handler_id=r.handler_id, request_date=r.request_date)
            for r in self._store.requests
            if r.client_id == client_id and r.handler_id in handler_ids
        ]

    async def count_for_client(self, client_id, statuses):
        self._store.check("count_for_client")
        wanted = set(statuses)
        return sum(
            1 for r in self._store.requests if r.client_id == client_id and r.status in wanted
        )


class FakeCategoryRepo(ServiceCategoryRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_label(self, label):
        self._store.check("get_category_by_label")
        return next((c for c in self._store.categories.values() if c.matches(label)), None)


class FakeUnreadRepo(UnreadRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def total_unread_messages(self, user_id):
        self._store.check("total_unread_messages")
        return sum(n for (uid, _), n in self._store.unreads.items() if uid == user_id)


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def port_repo(store):
    return FakePortRepo(store)


@pytest.fixture
def handler_repo(store):
    return FakeHandlerRepo(store)


@pytest.fixture
def request_repo(store):
    return FakeRequestRepo(store)


@pytest.fixture
def category_repo(store):
    return FakeCategoryRepo(store)


@pytest.fixture
def unread_repo(store):
    return FakeUnreadRepo(store)


@pytest.fixture
def resolver(port_repo, handler_repo, request_repo):
    return ResolveHandlerUseCase(port_repo, handler_repo, request_repo)


@pytest.fixture
def submit_uc(store, resolver, request_repo, category_repo):
    return SubmitServiceRequestUseCase(
        resolver=resolver,
        request_repo=request_repo,
        category_repo=category_repo,
        today=lambda: TODAY,
        resolution_scope=store.savepoint,
    )
