"""Single entry point turning a raw sheet grid into a leaderboard summary."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stock_competition.classes.errors import IngestError, StructuralError
from stock_competition.classes.grid_locator import RawGrid, locate
from stock_competition.classes.leaderboard import rank_participants
from stock_competition.classes.models import LeaderboardSummary
from stock_competition.classes.participant_extractor import extract_participants
from stock_competition.classes.sheet_layout import DEFAULT_ALIASES, DEFAULT_LAYOUT, AliasTable, SheetLayout
from stock_competition.classes.statistics import compute_statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestOutcome:
    summary: LeaderboardSummary | None = None
    error: IngestError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def ingest(
    grid: RawGrid | None,
    layout: SheetLayout = DEFAULT_LAYOUT,
    aliases: AliasTable = DEFAULT_ALIASES,
) -> LeaderboardSummary:
    """Build the ranked participants and statistics for one sheet snapshot.

    Raises StructuralError when the grid cannot hold the summary block. Malformed
    cells never raise; they fall back to per-field defaults.
    """
    row_count = len(grid) if grid is not None else 0
    if grid is None or row_count < layout.minimum_rows:
        raise StructuralError(row_count, layout.minimum_rows)

    location = locate(grid, layout, aliases)
    participants = extract_participants(grid, location, layout)
    ranked = rank_participants(participants)
    summary = LeaderboardSummary(participants=ranked, statistics=compute_statistics(ranked))
    logger.info(
        "ingested rows=%d participants=%d detail_blocks=%d",
        row_count,
        len(ranked),
        len(location.detail_start_rows),
    )
    return summary


def try_ingest(
    grid: RawGrid | None,
    layout: SheetLayout = DEFAULT_LAYOUT,
    aliases: AliasTable = DEFAULT_ALIASES,
) -> IngestOutcome:
    try:
        return IngestOutcome(summary=ingest(grid, layout, aliases))
    except IngestError as err:
        return IngestOutcome(error=err)
