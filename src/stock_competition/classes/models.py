"""Domain records for competition participants and their stock picks."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

STARTING_CAPITAL = 10000.0

_WHITESPACE_RE = re.compile(r"\s+")


def participant_id(name: str) -> str:
    """Derive a stable id from a display name, e.g. "Mary Ann" -> "mary-ann"."""
    return _WHITESPACE_RE.sub("-", name.strip().lower())


@dataclass(frozen=True)
class StockHolding:
    """One stock pick owned by a participant. return_pct is a percentage (12.5 == +12.5%)."""

    symbol: str
    buy_price: float
    current_price: float
    return_pct: float
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "buyPrice": self.buy_price,
            "currentPrice": self.current_price,
            "returnPct": self.return_pct,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Participant:
    id: str
    name: str
    total_return_pct: float
    day_change_pct: float
    portfolio_value: float
    total_pnl: float
    holdings: tuple[StockHolding, ...] = field(default_factory=tuple)
    rank: int | None = None

    @classmethod
    def create(
        cls,
        name: str,
        *,
        total_return_pct: float,
        day_change_pct: float,
        portfolio_value: float,
        holdings: Iterable[StockHolding] = (),
    ) -> Participant:
        """Build a participant with id and P&L derived from name and portfolio value."""
        return cls(
            id=participant_id(name),
            name=name,
            total_return_pct=total_return_pct,
            day_change_pct=day_change_pct,
            portfolio_value=portfolio_value,
            total_pnl=portfolio_value - STARTING_CAPITAL,
            holdings=tuple(holdings),
        )

    def with_rank(self, rank: int) -> Participant:
        return dataclasses.replace(self, rank=rank)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rank": self.rank,
            "totalReturnPct": self.total_return_pct,
            "dayChangePct": self.day_change_pct,
            "portfolioValue": self.portfolio_value,
            "totalPnL": self.total_pnl,
            "holdings": [holding.to_dict() for holding in self.holdings],
        }


@dataclass(frozen=True)
class Statistics:
    top_performer: Participant
    bottom_performer: Participant
    top_stock: StockHolding | None
    worst_stock: StockHolding | None
    top10_stocks: tuple[StockHolding, ...]
    worst10_stocks: tuple[StockHolding, ...]
    day_mover: Participant
    average_return_pct: float
    total_portfolio_value: float
    total_pnl: float
    winners_count: int
    losers_count: int

    def to_dict(self) -> dict[str, Any]:
        # participants are referenced by id; their full records live in the participant list
        return {
            "topPerformer": self.top_performer.id,
            "bottomPerformer": self.bottom_performer.id,
            "topStock": self.top_stock.to_dict() if self.top_stock else None,
            "worstStock": self.worst_stock.to_dict() if self.worst_stock else None,
            "top10Stocks": [stock.to_dict() for stock in self.top10_stocks],
            "worst10Stocks": [stock.to_dict() for stock in self.worst10_stocks],
            "dayMover": self.day_mover.id,
            "averageReturnPct": self.average_return_pct,
            "totalPortfolioValue": self.total_portfolio_value,
            "totalPnL": self.total_pnl,
            "winnersCount": self.winners_count,
            "losersCount": self.losers_count,
        }


@dataclass(frozen=True)
class LeaderboardSummary:
    participants: tuple[Participant, ...]
    statistics: Statistics | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "participants": [participant.to_dict() for participant in self.participants],
            "statistics": self.statistics.to_dict() if self.statistics else None,
        }
