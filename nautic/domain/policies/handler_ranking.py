"""HandlerRankingPolicy — deterministic choice of the best handler."""

from __future__ import annotations

from collections.abc import Mapping, Set
from functools import reduce

from nautic.domain.policies.history import HandlerStats


def _better(a: int, b: int, stats: Mapping[int, HandlerStats]) -> int:
    """Return whichever of two handlers ranks first.

    Order: most requests, then most recent request, then smallest id.
    """
    sa = stats.get(a, HandlerStats())
    sb = stats.get(b, HandlerStats())
    if sa.count != sb.count:
        return a if sa.count > sb.count else b
    if sa.most_recent != sb.most_recent:
        return a if sa.most_recent > sb.most_recent else b
    return min(a, b)


def pick_best_handler(
    candidates: Set[int],
    stats: Mapping[int, HandlerStats],
) -> int | None:
    """Pick one handler out of the candidates, or None when there are none.

    A single candidate is returned without looking at ``stats``. Otherwise
    the candidates are reduced pairwise with a strict total order, so the
    result does not depend on iteration order of the input set.

    Args:
        candidates: eligible handler ids.
        stats: history per handler; missing entries count as no history.
    """
    if not candidates:
        return None
    if len(candidates) == 1:
        return next(iter(candidates))

    return reduce(lambda best, other: _better(best, other, stats), sorted(candidates))
