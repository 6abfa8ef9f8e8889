import datetime
import json
import logging
from typing import Any, Sequence

from stock_competition.classes.models import LeaderboardSummary, Participant, Statistics

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def to_utc_iso(value: datetime.datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    value = value.astimezone(datetime.timezone.utc)
    return value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


def build_chart_rows(participants: Sequence[Participant]) -> list[dict[str, Any]]:
    return [
        {
            "name": p.name,
            "return": p.total_return_pct,
            "value": p.portfolio_value,
            "pnl": p.total_pnl,
        }
        for p in participants
    ]


def build_win_loss_breakdown(statistics: Statistics | None) -> list[dict[str, Any]]:
    if statistics is None:
        return []
    return [
        {"name": "Profitable", "value": statistics.winners_count},
        {"name": "In Loss", "value": statistics.losers_count},
    ]


def build_snapshot(
    summary: LeaderboardSummary,
    last_updated: datetime.datetime | None = None,
    generated_at: datetime.datetime | None = None,
) -> dict[str, Any]:
    generated = to_utc_iso(generated_at or datetime.datetime.now(datetime.timezone.utc))
    payload = summary.to_dict()
    payload.update(
        {
            "schema_version": SCHEMA_VERSION,
            "generated_at": generated,
            "last_updated": to_utc_iso(last_updated) or generated,
            "chart": build_chart_rows(summary.participants),
            "win_loss": build_win_loss_breakdown(summary.statistics),
        }
    )
    logger.debug("snapshot participants=%d", len(summary.participants))
    return payload


def to_stable_json(payload: Any) -> str:
    return (
        json.dumps(
            payload,
            sort_keys=True,
            indent=2,
            separators=(",", ":"),
            ensure_ascii=True,
        )
        + "\n"
    )
