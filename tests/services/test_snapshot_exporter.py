import datetime
import json

from stock_competition.classes.models import LeaderboardSummary
from stock_competition.services.ingest import ingest
from stock_competition.services.snapshot_exporter import (
    build_chart_rows,
    build_snapshot,
    build_win_loss_breakdown,
    to_stable_json,
    to_utc_iso,
)


def _grid():
    rows = [["", "Alice", "Bob"], ["", "AAA", "XYZ"], ["", "BBB", ""]]
    rows.extend(["", "", ""] for _ in range(8))
    rows += [["", "$11,000", "$9,500"], ["", "1%", "-2%"], ["", "10%", "-5%"]]
    return rows


def test_to_utc_iso_normalizes_timezone():
    naive = datetime.datetime(2026, 1, 5, 14, 30, 15, 999)
    eastern = datetime.datetime(2026, 1, 5, 9, 30, tzinfo=datetime.timezone(datetime.timedelta(hours=-5)))

    assert to_utc_iso(naive) == "2026-01-05T14:30:15Z"
    assert to_utc_iso(eastern) == "2026-01-05T14:30:00Z"
    assert to_utc_iso(None) is None


def test_chart_rows_and_win_loss():
    summary = ingest(_grid())

    assert build_chart_rows(summary.participants) == [
        {"name": "Alice", "return": 10.0, "value": 11000.0, "pnl": 1000.0},
        {"name": "Bob", "return": -5.0, "value": 9500.0, "pnl": -500.0},
    ]
    assert build_win_loss_breakdown(summary.statistics) == [
        {"name": "Profitable", "value": 1},
        {"name": "In Loss", "value": 1},
    ]
    assert build_win_loss_breakdown(None) == []


def test_build_snapshot_envelope():
    summary = ingest(_grid())
    generated = datetime.datetime(2026, 3, 1, 12, 0, tzinfo=datetime.timezone.utc)

    payload = build_snapshot(summary, generated_at=generated)

    assert payload["schema_version"] == 1
    assert payload["generated_at"] == "2026-03-01T12:00:00Z"
    assert payload["last_updated"] == "2026-03-01T12:00:00Z"
    assert [p["rank"] for p in payload["participants"]] == [1, 2]
    assert payload["statistics"]["topPerformer"] == "alice"
    assert payload["statistics"]["averageReturnPct"] == 2.5
    assert payload["statistics"]["top10Stocks"][0]["symbol"] == "AAA"


def test_build_snapshot_empty_summary():
    payload = build_snapshot(LeaderboardSummary(participants=(), statistics=None))

    assert payload["participants"] == []
    assert payload["statistics"] is None
    assert payload["win_loss"] == []


def test_to_stable_json_is_sorted_with_newline():
    text = to_stable_json({"b": 1, "a": [1, 2]})

    assert text.endswith("\n")
    assert list(json.loads(text)) == ["a", "b"]
    assert text.index('"a"') < text.index('"b"')
