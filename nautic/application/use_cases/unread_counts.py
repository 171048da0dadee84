"""UnreadCountService — process-wide unread messages / open requests counts.

The service is bound to the authenticated user through ``login`` and
``logout``. Subscribers receive a snapshot whenever it changes, once on
subscribe, and a zeroed snapshot on logout.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from nautic.application.ports.request_repo import ServiceRequestRepository
from nautic.application.ports.unread_repo import UnreadRepository
from nautic.domain.errors import DataStoreUnavailable
from nautic.domain.value_objects.enums import RequestStatus

logger = logging.getLogger(__name__)

BADGE_CAP = 99

Subscriber = Callable[["UnreadCounts"], Awaitable[None] | None]


@dataclass(frozen=True)
class UnreadCounts:
    messages: int = 0
    requests: int = 0

    @property
    def total(self) -> int:
        return self.messages + self.requests


def format_badge(n: int) -> str | int | None:
    """Badge label for a count: hidden at 0, capped at "99+"."""
    if n <= 0:
        return None
    if n > BADGE_CAP:
        return f"{BADGE_CAP}+"
    return n


async def compute_counts(
    user_id: int,
    unread_repo: UnreadRepository,
    request_repo: ServiceRequestRepository,
    open_statuses: Iterable[RequestStatus],
) -> UnreadCounts:
    """One-shot computation; a failing source contributes 0."""
    try:
        messages = await unread_repo.total_unread_messages(user_id)
    except DataStoreUnavailable:
        logger.warning("Unread messages unavailable for user %d", user_id, exc_info=True)
        messages = 0

    try:
        requests = await request_repo.count_for_client(user_id, open_statuses)
    except DataStoreUnavailable:
        logger.warning("Open requests unavailable for user %d", user_id, exc_info=True)
        requests = 0

    return UnreadCounts(messages=messages, requests=requests)


class UnreadCountService:
    """Observable unread counts tied to the logged-in user.

    ``load`` computes the counts of one user. It must open its own store
    session, since the service outlives any request.
    """

    def __init__(
        self,
        load: Callable[[int], Awaitable[UnreadCounts]],
        poll_interval: float = 30.0,
    ):
        self._load = load
        self._poll_interval = poll_interval
        self._user_id: int | None = None
        self._counts = UnreadCounts()
        self._subscribers: list[Subscriber] = []
        self._task: asyncio.Task | None = None

    @property
    def user_id(self) -> int | None:
        return self._user_id

    @property
    def counts(self) -> UnreadCounts:
        return self._counts

    async def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback and return the matching unsubscribe function."""
        self._subscribers.append(callback)
        await self._call(callback, self._counts)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def login(self, user_id: int) -> UnreadCounts:
        if self._user_id != user_id:
            logger.info("Unread counts bound to user %d", user_id)
        self._user_id = user_id
        return await self.refresh()

    async def logout(self) -> None:
        """Forget the user and reset counts to zero."""
        await self.stop()
        self._user_id = None
        await self._publish(UnreadCounts())

    async def refresh(self) -> UnreadCounts:
        if self._user_id is None:
            await self._publish(UnreadCounts())
            return self._counts

        counts = await self._load(self._user_id)
        await self._publish(counts)
        return counts

    async def notify_changed(self) -> None:
        """Entry point for change feeds (new message, read marker, status)."""
        await self.refresh()

    async def start(self) -> None:
        """Start polling in the background; no-op when already running."""
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(self._poll())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _poll(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self._poll_interval)

    async def _publish(self, counts: UnreadCounts) -> None:
        if counts == self._counts:
            return
        self._counts = counts
        for callback in list(self._subscribers):
            await self._call(callback, counts)

    @staticmethod
    async def _call(callback: Subscriber, counts: UnreadCounts) -> None:
        try:
            result = callback(counts)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Unread count subscriber failed")
