import pytest

from stock_competition.classes.grid_locator import locate
from stock_competition.classes.participant_extractor import (
    assign_unique_ids,
    build_summary_holdings,
    choose_holdings_source,
    extract_participant,
    extract_participants,
    read_detail_holdings,
    read_summary_symbols,
)
from stock_competition.classes.models import StockHolding
from stock_competition.classes.sheet_layout import HoldingsSource


def _summary_grid(columns):
    """Build the 14-row summary block; columns are (name, symbols, value, day, total)."""
    rows = [[""] + [name for name, *_ in columns]]
    for i in range(10):
        rows.append([""] + [symbols[i] if i < len(symbols) else "" for _, symbols, *_ in columns])
    rows.append(["Value"] + [value for _, _, value, _, _ in columns])
    rows.append(["Day"] + [day for _, _, _, day, _ in columns])
    rows.append(["Total"] + [total for *_, total in columns])
    return rows


def _detail_row(symbol, buy, current, ret, reason=""):
    return [symbol, "10", buy, current, "", "", "", "", "", ret, "", reason]


def test_choose_holdings_source():
    assert choose_holdings_source(None) is HoldingsSource.SUMMARY
    assert choose_holdings_source(0) is HoldingsSource.DETAIL
    assert choose_holdings_source(20) is HoldingsSource.DETAIL


def test_summary_fallback_splits_total_return_across_symbols():
    grid = _summary_grid([("Alice", ["AAA", "BBB"], "$11,000", "1.5%", "10%")])

    participant = extract_participant(grid, "Alice", 1)

    assert participant.portfolio_value == 11000.0
    assert participant.day_change_pct == 1.5
    assert participant.total_return_pct == 10.0
    assert participant.total_pnl == 1000.0
    assert participant.holdings == (
        StockHolding("AAA", 0.0, 0.0, 5.0),
        StockHolding("BBB", 0.0, 0.0, 5.0),
    )


def test_summary_symbols_skip_blank_and_tbd():
    grid = _summary_grid([("Alice", [" AAA ", "TBD", "", "CCC"], "$10,000", "0%", "0%")])

    assert read_summary_symbols(grid, 1) == ["AAA", "CCC"]


def test_summary_fallback_with_no_symbols_is_empty():
    grid = _summary_grid([("Alice", ["TBD"], "$10,000", "0%", "4%")])

    assert extract_participant(grid, "Alice", 1).holdings == ()
    assert build_summary_holdings([], 4.0) == ()


def test_malformed_summary_cells_use_defaults():
    grid = _summary_grid([("Alice", [], "#REF!", "n/a", "")])

    participant = extract_participant(grid, "Alice", 1)

    assert participant.portfolio_value == 10000.0
    assert participant.day_change_pct == 0.0
    assert participant.total_return_pct == 0.0
    assert participant.total_pnl == 0.0


def test_missing_column_uses_defaults():
    grid = _summary_grid([("Alice", ["AAA"], "$10,500", "1%", "5%")])

    participant = extract_participant(grid, "Ghost", 7)

    assert participant.portfolio_value == 10000.0
    assert participant.holdings == ()


def test_detail_block_stops_at_totals():
    grid = _summary_grid([("Alice", ["AAA", "BBB"], "$11,000", "0%", "10%")])
    grid += [
        ["Alice"],
        ["Symbol", "Shares", "Avg", "Current"],
        _detail_row("AAA", "$100.00", "$120.00", "20%", "AI play"),
        _detail_row("BBB", "$50", "$45", "-10%"),
        _detail_row("TOTALS", "", "", "5%"),
        _detail_row("ZZZ", "$1", "$2", "100%"),
    ]

    holdings = read_detail_holdings(grid, 14)

    assert holdings == (
        StockHolding("AAA", 100.0, 120.0, 20.0, "AI play"),
        StockHolding("BBB", 50.0, 45.0, -10.0, None),
    )


@pytest.mark.parametrize("terminator", [[""], ["Totals"], ["Symbol"], None])
def test_detail_block_terminators(terminator):
    grid = _summary_grid([("Alice", [], "$10,000", "0%", "0%")])
    grid += [["Alice"], ["Symbol"], _detail_row("AAA", "$1", "$2", "100%")]
    if terminator is not None:
        grid.append(terminator)
        grid.append(_detail_row("BBB", "$1", "$2", "100%"))

    holdings = read_detail_holdings(grid, 14)

    assert [h.symbol for h in holdings] == ["AAA"]


def test_detail_block_reads_at_most_ten_rows():
    grid = _summary_grid([("Alice", [], "$10,000", "0%", "0%")])
    grid += [["Alice"], ["Symbol"]]
    grid += [_detail_row(f"S{i}", "$1", "$1", "0%") for i in range(12)]

    holdings = read_detail_holdings(grid, 14)

    assert len(holdings) == 10
    assert holdings[-1].symbol == "S9"


def test_detail_block_replaces_summary_fallback():
    grid = _summary_grid([("Alice", ["AAA", "BBB", "CCC"], "$11,000", "0%", "10%")])
    grid += [["Alice"], ["Symbol"], _detail_row("XYZ", "$10", "$11", "10%"), ["TOTALS"]]

    participant = extract_participant(grid, "Alice", 1, detail_start_row=14)

    assert [h.symbol for h in participant.holdings] == ["XYZ"]


def test_empty_detail_block_does_not_fall_back():
    grid = _summary_grid([("Alice", ["AAA"], "$11,000", "0%", "10%")])
    grid += [["Alice"], ["Symbol"], ["TOTALS"]]

    participant = extract_participant(grid, "Alice", 1, detail_start_row=14)

    assert participant.holdings == ()


def test_extract_participants_mixes_both_strategies():
    grid = _summary_grid(
        [
            ("Alice", ["AAA", "BBB"], "$11,000", "0%", "10%"),
            ("Bob", ["CCC"], "$9,500", "0%", "-5%"),
        ]
    )
    grid += [["Bob"], ["Symbol"], _detail_row("DDD", "$20", "$19", "-5%"), ["TOTALS"]]

    participants = extract_participants(grid, locate(grid))

    assert [p.name for p in participants] == ["Alice", "Bob"]
    assert [h.symbol for h in participants[0].holdings] == ["AAA", "BBB"]
    assert [h.symbol for h in participants[1].holdings] == ["DDD"]
    assert participants[1].holdings[0].buy_price == 20.0


def test_assign_unique_ids_suffixes_repeats_in_sheet_order():
    grid = _summary_grid(
        [
            ("Bob", [], "$10,000", "0%", "1%"),
            ("bob", [], "$10,000", "0%", "2%"),
            ("Bob ", [], "$10,000", "0%", "3%"),
            ("Bob 2", [], "$10,000", "0%", "4%"),
        ]
    )

    participants = extract_participants(grid, locate(grid))

    assert [p.id for p in participants] == ["bob", "bob-2", "bob-3", "bob-2-2"]
    assert len({p.id for p in participants}) == 4


def test_assign_unique_ids_leaves_distinct_ids_untouched():
    grid = _summary_grid([("Alice", [], "$10,000", "0%", "0%"), ("Bob", [], "$10,000", "0%", "0%")])
    participants = [extract_participant(grid, "Alice", 1), extract_participant(grid, "Bob", 2)]

    unique = assign_unique_ids(participants)

    assert unique[0] is participants[0]
    assert unique[1] is participants[1]
