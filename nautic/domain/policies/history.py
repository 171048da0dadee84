"""HistoryPolicy — per-handler statistics of a client's past requests."""

from __future__ import annotations

from collections.abc import Iterable, Set
from dataclasses import dataclass
from datetime import date

from nautic.domain.entities.service_request import HistoryRow

NO_HISTORY_DATE = date.min


@dataclass(frozen=True)
class HandlerStats:
    """How often, and how recently, a client worked with one handler."""

    count: int = 0
    most_recent: date = NO_HISTORY_DATE


def aggregate_history(
    candidates: Set[int],
    rows: Iterable[HistoryRow],
) -> dict[int, HandlerStats]:
    """Fold a client's request history into stats for every candidate.

    Every candidate gets an entry, zeroed when there is no history, so
    ranking can compare "never worked together" like any other value.
    Rows assigned to nobody or to a non-candidate are skipped. A row
    without a date still counts but leaves ``most_recent`` untouched.

    The caller is responsible for passing rows of a single client only.
    """
    stats = {handler_id: HandlerStats() for handler_id in candidates}

    for row in rows:
        if row.handler_id is None or row.handler_id not in stats:
            continue
        prev = stats[row.handler_id]
        most_recent = prev.most_recent
        if row.request_date is not None and row.request_date > most_recent:
            most_recent = row.request_date
        stats[row.handler_id] = HandlerStats(count=prev.count + 1, most_recent=most_recent)

    return stats
