"""SkillFilterPolicy — narrow eligible handlers to those declaring a skill."""

from __future__ import annotations

from collections.abc import Set


def apply_skill_filter(
    candidates: Set[int],
    skilled: Set[int],
    strict: bool = False,
) -> frozenset[int]:
    """Keep only the candidates that declared the requested category.

    The filter is advisory by default: when no candidate declared the
    skill, the unfiltered candidate set is returned so the request still
    lands on a handler of the right port. With ``strict=True`` an empty
    match stays empty.

    Args:
        candidates: handlers eligible by port and profile.
        skilled: handlers (any subset) that declared the category.
        strict: disable the fallback to the unfiltered set.
    """
    matched = frozenset(candidates) & frozenset(skilled)
    if matched or strict:
        return matched
    return frozenset(candidates)
