"""Order participants by total return and assign ranks."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import Participant


def rank_participants(participants: Iterable[Participant]) -> tuple[Participant, ...]:
    """Sort by total return (best first) and number 1..n.

    Ties keep sheet order and still get distinct ranks.
    """
    named = [p for p in participants if p.name.strip()]
    ordered = sorted(named, key=lambda p: p.total_return_pct, reverse=True)
    return tuple(p.with_rank(i) for i, p in enumerate(ordered, start=1))


def filter_participants(participants: Sequence[Participant], term: str) -> list[Participant]:
    """Case-insensitive name search that keeps leaderboard order."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(participants)
    return [p for p in participants if needle in p.name.lower()]
