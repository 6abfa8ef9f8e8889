"""Cross-participant aggregates for the leaderboard."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import Participant, Statistics, StockHolding

TOP_STOCKS_LIMIT = 10


def all_holdings(participants: Iterable[Participant]) -> list[StockHolding]:
    return [holding for participant in participants for holding in participant.holdings]


def deduplicate_stocks(holdings: Iterable[StockHolding]) -> list[StockHolding]:
    """Keep one holding per symbol, the one with the highest return.

    A replaced symbol moves to the end of the result, which decides the order of
    equal returns after sorting.
    """
    best: dict[str, StockHolding] = {}
    for holding in holdings:
        existing = best.get(holding.symbol)
        if existing is None or holding.return_pct > existing.return_pct:
            best.pop(holding.symbol, None)
            best[holding.symbol] = holding
    return list(best.values())


def compute_statistics(ranked: Sequence[Participant]) -> Statistics | None:
    if not ranked:
        return None

    holdings = all_holdings(ranked)
    # max/min return the first of equal values
    top_stock = max(holdings, key=lambda h: h.return_pct) if holdings else None
    worst_stock = min(holdings, key=lambda h: h.return_pct) if holdings else None

    sorted_stocks = sorted(deduplicate_stocks(holdings), key=lambda h: h.return_pct, reverse=True)
    top10 = sorted_stocks[:TOP_STOCKS_LIMIT]
    worst10 = list(reversed(sorted_stocks))[:TOP_STOCKS_LIMIT]

    return Statistics(
        top_performer=ranked[0],
        bottom_performer=ranked[-1],
        top_stock=top_stock,
        worst_stock=worst_stock,
        top10_stocks=tuple(top10),
        worst10_stocks=tuple(worst10),
        day_mover=max(ranked, key=lambda p: p.day_change_pct),
        average_return_pct=sum(p.total_return_pct for p in ranked) / len(ranked),
        total_portfolio_value=sum(p.portfolio_value for p in ranked),
        total_pnl=sum(p.total_pnl for p in ranked),
        winners_count=sum(1 for p in ranked if p.total_return_pct > 0),
        losers_count=sum(1 for p in ranked if p.total_return_pct <= 0),
    )
