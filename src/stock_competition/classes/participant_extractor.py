"""Build Participant records from the summary and detail blocks of the sheet."""

from __future__ import annotations

import dataclasses
import logging

from .cell_parsing import DEFAULT_NUMERIC, DEFAULT_PORTFOLIO_VALUE, cell_text, parse_currency, parse_percent
from .grid_locator import GridLocation, RawGrid
from .models import Participant, StockHolding
from .sheet_layout import (
    DEFAULT_LAYOUT,
    SYMBOL_HEADER_SENTINEL,
    TBD_SENTINEL,
    TOTALS_SENTINEL,
    HoldingsSource,
    SheetLayout,
)

logger = logging.getLogger(__name__)


def _row(grid: RawGrid, row_idx: int):
    if 0 <= row_idx < len(grid):
        return grid[row_idx]
    return None


def choose_holdings_source(detail_start_row: int | None) -> HoldingsSource:
    return HoldingsSource.SUMMARY if detail_start_row is None else HoldingsSource.DETAIL


def _ends_detail_block(symbol: str) -> bool:
    return not symbol or symbol.upper() == TOTALS_SENTINEL or symbol == SYMBOL_HEADER_SENTINEL


def read_detail_holdings(
    grid: RawGrid, start_row: int, layout: SheetLayout = DEFAULT_LAYOUT
) -> tuple[StockHolding, ...]:
    """Read per-stock rows below a participant's name until a blank, TOTALS or Symbol row."""
    holdings: list[StockHolding] = []
    for row_idx in layout.detail_stock_rows(start_row):
        row = _row(grid, row_idx)
        if row is None:
            break
        symbol = cell_text(row, layout.detail_symbol_col)
        if _ends_detail_block(symbol):
            break
        holdings.append(
            StockHolding(
                symbol=symbol,
                buy_price=parse_currency(cell_text(row, layout.detail_buy_price_col), DEFAULT_NUMERIC),
                current_price=parse_currency(cell_text(row, layout.detail_current_price_col), DEFAULT_NUMERIC),
                return_pct=parse_percent(cell_text(row, layout.detail_return_col), DEFAULT_NUMERIC),
                reason=cell_text(row, layout.detail_reason_col) or None,
            )
        )
    return tuple(holdings)


def read_summary_symbols(grid: RawGrid, column: int, layout: SheetLayout = DEFAULT_LAYOUT) -> list[str]:
    symbols: list[str] = []
    for row_idx in layout.summary_symbol_row_range:
        symbol = cell_text(_row(grid, row_idx), column)
        if symbol and symbol != TBD_SENTINEL:
            symbols.append(symbol)
    return symbols


def build_summary_holdings(symbols: list[str], total_return_pct: float) -> tuple[StockHolding, ...]:
    """Spread the portfolio return evenly over symbols that have no per-stock figures."""
    if not symbols:
        return ()
    share = total_return_pct / len(symbols)
    return tuple(
        StockHolding(symbol=symbol, buy_price=0.0, current_price=0.0, return_pct=share) for symbol in symbols
    )


def extract_participant(
    grid: RawGrid,
    name: str,
    column: int,
    detail_start_row: int | None = None,
    layout: SheetLayout = DEFAULT_LAYOUT,
) -> Participant:
    portfolio_value = parse_currency(
        cell_text(_row(grid, layout.portfolio_value_row), column), DEFAULT_PORTFOLIO_VALUE
    )
    day_change_pct = parse_percent(cell_text(_row(grid, layout.day_change_row), column), DEFAULT_NUMERIC)
    total_return_pct = parse_percent(cell_text(_row(grid, layout.total_return_row), column), DEFAULT_NUMERIC)

    source = choose_holdings_source(detail_start_row)
    if detail_start_row is not None:
        holdings = read_detail_holdings(grid, detail_start_row, layout)
    else:
        holdings = build_summary_holdings(read_summary_symbols(grid, column, layout), total_return_pct)

    logger.debug("participant=%s col=%d source=%s holdings=%d", name, column, source.value, len(holdings))
    return Participant.create(
        name,
        total_return_pct=total_return_pct,
        day_change_pct=day_change_pct,
        portfolio_value=portfolio_value,
        holdings=holdings,
    )


def assign_unique_ids(participants: list[Participant]) -> list[Participant]:
    """Suffix repeated ids in sheet order: "bob", "bob-2", "bob-3"."""
    seen: set[str] = set()
    unique: list[Participant] = []
    for participant in participants:
        candidate = participant.id
        suffix = 2
        while candidate in seen:
            candidate = f"{participant.id}-{suffix}"
            suffix += 1
        seen.add(candidate)
        if candidate != participant.id:
            logger.debug("duplicate id %s for %s renamed to %s", participant.id, participant.name, candidate)
            participant = dataclasses.replace(participant, id=candidate)
        unique.append(participant)
    return unique


def extract_participants(
    grid: RawGrid, location: GridLocation, layout: SheetLayout = DEFAULT_LAYOUT
) -> list[Participant]:
    participants = [
        extract_participant(grid, name, column, location.detail_start_rows.get(name), layout)
        for name, column in location.participants
    ]
    return assign_unique_ids(participants)
