import logging
import pathlib
from typing import Any

from stock_competition.classes.leaderboard import filter_participants
from stock_competition.classes.models import LeaderboardSummary
from stock_competition.classes.sheet_layout import AliasTable, load_alias_table
from stock_competition.config import Settings, configure_runtime
from stock_competition.paths import resolve_repo_path
from stock_competition.services.leaderboard_service import GridProvider, LeaderboardService
from stock_competition.services.sheet_client import SheetCsvClient, read_csv_file
from stock_competition.services.snapshot_exporter import build_snapshot, to_stable_json

logger = logging.getLogger(__name__)


def resolve_provider(args: Any, settings: Settings) -> GridProvider:
    csv_path = getattr(args, "csv", None)
    if csv_path:
        return lambda: read_csv_file(csv_path)
    url = getattr(args, "url", None) or settings.sheet_url
    if not url:
        raise ValueError("No sheet source: pass --csv or --url, or set SHEET_URL.")
    client = SheetCsvClient(url, timeout_sec=settings.timeout_sec)
    return client.fetch_grid


def _load_aliases(settings: Settings) -> AliasTable:
    return load_alias_table(resolve_repo_path(settings.aliases_file))


def build_service(args: Any) -> LeaderboardService:
    settings = configure_runtime()
    return LeaderboardService(resolve_provider(args, settings), aliases=_load_aliases(settings))


def format_leaderboard(summary: LeaderboardSummary, search: str | None = None) -> list[str]:
    lines = [f"{'#':>3}  {'Name':<24} {'Return':>9} {'Today':>8} {'Value':>12} {'P&L':>11}"]
    for p in filter_participants(summary.participants, search or ""):
        lines.append(
            f"{p.rank:>3}  {p.name:<24} {p.total_return_pct:>+8.2f}% {p.day_change_pct:>+7.2f}% "
            f"{p.portfolio_value:>12,.2f} {p.total_pnl:>+11,.2f}"
        )
    stats = summary.statistics
    if stats is None:
        lines.append("No participants found.")
        return lines
    lines.append("")
    lines.append(f"Leader: {stats.top_performer.name} ({stats.top_performer.total_return_pct:+.2f}%)")
    if stats.top_stock is not None:
        lines.append(f"Top stock: {stats.top_stock.symbol} ({stats.top_stock.return_pct:+.2f}%)")
    if stats.worst_stock is not None:
        lines.append(f"Worst stock: {stats.worst_stock.symbol} ({stats.worst_stock.return_pct:+.2f}%)")
    lines.append(f"Day mover: {stats.day_mover.name} ({stats.day_mover.day_change_pct:+.2f}% today)")
    lines.append(f"Average return: {stats.average_return_pct:+.2f}%")
    lines.append(f"Total value: ${stats.total_portfolio_value:,.2f}  Total P&L: ${stats.total_pnl:,.2f}")
    lines.append(f"Profitable: {stats.winners_count}  In loss: {stats.losers_count}")
    return lines


def run_show(args: Any) -> int:
    service = build_service(args)
    outcome = service.refresh()
    if not outcome.ok or outcome.summary is None:
        return 1
    for line in format_leaderboard(outcome.summary, getattr(args, "search", None)):
        print(line)
    return 0


def run_export(args: Any) -> int:
    service = build_service(args)
    outcome = service.refresh()
    if not outcome.ok or outcome.summary is None:
        logger.debug("export skipped: %s", outcome.error)
        return 1
    payload = build_snapshot(outcome.summary, service.last_updated)
    out_path = pathlib.Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_stable_json(payload), encoding="utf-8")

    logger.info("participant count=%d", len(outcome.summary.participants))
    logger.info("output path=%s", out_path)
    return 0
