"""Tests for ResolveHandlerUseCase with in-memory fakes."""

from __future__ import annotations

from datetime import date

import pytest

from nautic.application.use_cases.resolve_handler import (
    EligibilityLookup,
    ResolveHandlerUseCase,
)
from nautic.domain.errors import DataStoreUnavailable
from nautic.domain.value_objects.assignment_context import BoatContext, ClientContext
from nautic.domain.value_objects.enums import Profile

MAINTENANCE = 1
IMPROVEMENT = 2


@pytest.mark.asyncio
async def test_client_history_picks_known_handler(store, resolver):
    """C1 on P1, H1/H2 serve P1, two past requests with H1 → H1."""
    store.add_client(1, ports=[100])
    store.add_handler(11, ports=[100])
    store.add_handler(12, ports=[100])
    store.add_request(1, 11, date(2024, 1, 10))
    store.add_request(1, 11, date(2024, 2, 10))

    assert await resolver.execute(ClientContext(1)) == 11


@pytest.mark.asyncio
async def test_client_without_port_returns_none(store, resolver):
    store.add_client(2)
    store.add_handler(11, ports=[100])

    assert await resolver.execute(ClientContext(2)) is None


@pytest.mark.asyncio
async def test_no_handler_on_port_returns_none(store, resolver):
    store.add_client(1, ports=[100])
    store.add_client(3, ports=[100])  # another client on the same port
    store.add_handler(11, ports=[200])

    assert await resolver.execute(ClientContext(1)) is None


@pytest.mark.asyncio
async def test_non_handler_profiles_are_excluded(store, resolver):
    store.add_client(1, ports=[100])
    store.add_client(3, ports=[100])
    store.add_handler(5, ports=[100], profile=Profile.NAUTICAL_COMPANY)
    store.add_handler(11, ports=[100])

    assert await resolver.execute(ClientContext(1)) == 11


@pytest.mark.asyncio
async def test_single_candidate_skips_history(store, resolver):
    store.add_client(1, ports=[100])
    store.add_handler(11, ports=[100])
    store.add_handler(12, ports=[200])
    store.add_request(1, 12, date(2024, 5, 5))

    assert await resolver.execute(ClientContext(1)) == 11
    assert "get_client_request_history" not in store.calls


@pytest.mark.asyncio
async def test_higher_count_wins(store, resolver):
    store.add_client(1, ports=[100])
    store.add_handler(11, ports=[100])
    store.add_handler(12, ports=[100])
    for d in (date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)):
        store.add_request(1, 11, d)
    for d in (date(2023, 1, 1), date(2023, 1, 2), date(2023, 1, 3), date(2023, 1, 4), date(2023, 1, 5)):
        store.add_request(1, 12, d)

    assert await resolver.execute(ClientContext(1)) == 12


@pytest.mark.asyncio
async def test_recency_breaks_count_tie(store, resolver):
    store.add_client(1, ports=[100])
    store.add_handler(11, ports=[100])
    store.add_handler(12, ports=[100])
    store.add_request(1, 11, date(2023, 12, 1))
    store.add_request(1, 11, date(2024, 1, 1))
    store.add_request(1, 12, date(2023, 11, 1))
    store.add_request(1, 12, date(2024, 6, 1))

    assert await resolver.execute(ClientContext(1)) == 12


@pytest.mark.asyncio
async def test_new_client_gets_smallest_id(store, resolver):
    store.add_client(1, ports=[100])
    store.add_handler(31, ports=[100])
    store.add_handler(17, ports=[100])
    store.add_handler(24, ports=[100])

    assert await resolver.execute(ClientContext(1)) == 17


@pytest.mark.asyncio
async def test_other_clients_history_is_ignored(store, resolver):
    store.add_client(1, ports=[100])
    store.add_client(2, ports=[100])
    store.add_handler(11, ports=[100])
    store.add_handler(12, ports=[100])
    for d in (date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)):
        store.add_request(2, 12, d)

    assert await resolver.execute(ClientContext(1)) == 11


@pytest.mark.asyncio
async def test_history_stats_only_for_own_client(store, resolver):
    store.add_client(1, ports=[100])
    store.add_client(2, ports=[100])
    store.add_handler(11, ports=[100])
    store.add_handler(12, ports=[100])
    store.add_request(1, 11, date(2024, 1, 1))
    store.add_request(2, 11, date(2024, 8, 1))
    store.add_request(2, 12, date(2024, 8, 1))

    stats = await resolver.history(1, frozenset({11, 12}))
    assert stats[11].count == 1
    assert stats[11].most_recent == date(2024, 1, 1)
    assert stats[12].count == 0


@pytest.mark.asyncio
async def test_resolution_is_deterministic(store, resolver):
    store.add_client(1, ports=[100, 200])
    for hid in (40, 41, 42, 43):
        store.add_handler(hid, ports=[100 if hid % 2 else 200])
    store.add_request(1, 42, date(2024, 3, 3))
    store.add_request(1, 43, date(2024, 3, 3))

    first = await resolver.execute(ClientContext(1))
    second = await resolver.execute(ClientContext(1))
    assert first == second == 42


@pytest.mark.asyncio
async def test_skill_filter_narrows_candidates(store, resolver):
    store.add_client(1, ports=[100])
    store.add_handler(11, ports=[100], skills=[IMPROVEMENT])
    store.add_handler(12, ports=[100], skills=[MAINTENANCE])
    store.add_request(1, 11, date(2024, 1, 1))

    assert await resolver.execute(ClientContext(1), MAINTENANCE) == 12


@pytest.mark.asyncio
async def test_skill_filter_falls_back_when_nobody_matches(store, resolver):
    store.add_client(1, ports=[100])
    store.add_handler(11, ports=[100])
    store.add_handler(12, ports=[100])

    assert await resolver.execute(ClientContext(1), MAINTENANCE) == 11


@pytest.mark.asyncio
async def test_strict_skill_filter_returns_none(store, port_repo, handler_repo, request_repo):
    store.add_client(1, ports=[100])
    store.add_handler(11, ports=[100])
    strict = ResolveHandlerUseCase(port_repo, handler_repo, request_repo, strict_skill_filter=True)

    assert await strict.execute(ClientContext(1), MAINTENANCE) is None


@pytest.mark.asyncio
async def test_boat_context_uses_home_port(store, resolver):
    store.add_client(1, ports=[100, 200])
    store.add_boat(7, owner_id=1, port_id=200)
    store.add_handler(11, ports=[100])
    store.add_handler(12, ports=[200])
    store.add_request(1, 11, date(2024, 1, 1))

    assert await resolver.execute(BoatContext(boat_id=7, client_id=1)) == 12


@pytest.mark.asyncio
async def test_boat_without_home_port_returns_none(store, resolver):
    store.add_client(1, ports=[100])
    store.add_boat(7, owner_id=1, port_id=None)
    store.add_handler(11, ports=[100])

    assert await resolver.execute(BoatContext(boat_id=7, client_id=1)) is None


@pytest.mark.asyncio
async def test_store_outage_propagates(store, resolver):
    store.add_client(1, ports=[100])
    store.unavailable = True

    with pytest.raises(DataStoreUnavailable):
        await resolver.execute(ClientContext(1))


@pytest.mark.asyncio
async def test_eligibility_lookup_returns_set(store, port_repo, handler_repo):
    store.add_client(1, ports=[100, 200])
    store.add_handler(11, ports=[100, 200])
    store.add_handler(12, ports=[200])
    lookup = EligibilityLookup(port_repo, handler_repo)

    assert await lookup.candidates(ClientContext(1)) == frozenset({11, 12})
