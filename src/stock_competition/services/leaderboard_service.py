"""Refresh loop glue: fetch a grid, ingest it, keep the last good leaderboard."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable

from stock_competition.classes.errors import AcquisitionError, IngestError
from stock_competition.classes.grid_locator import RawGrid
from stock_competition.classes.models import LeaderboardSummary
from stock_competition.classes.sheet_layout import DEFAULT_ALIASES, DEFAULT_LAYOUT, AliasTable, SheetLayout
from stock_competition.services.ingest import IngestOutcome, ingest

logger = logging.getLogger(__name__)

GridProvider = Callable[[], RawGrid]


class LeaderboardService:
    """Holds the most recent successful summary.

    Refreshes are not coordinated here; callers serialize them.
    """

    def __init__(
        self,
        provider: GridProvider,
        layout: SheetLayout = DEFAULT_LAYOUT,
        aliases: AliasTable = DEFAULT_ALIASES,
    ) -> None:
        self.provider = provider
        self.layout = layout
        self.aliases = aliases
        self._snapshot: tuple[LeaderboardSummary, datetime.datetime] | None = None

    @property
    def current(self) -> LeaderboardSummary | None:
        return self._snapshot[0] if self._snapshot else None

    @property
    def last_updated(self) -> datetime.datetime | None:
        return self._snapshot[1] if self._snapshot else None

    def refresh(self) -> IngestOutcome:
        """Fetch and ingest once; on failure the previous summary stays current."""
        try:
            grid = self.provider()
            summary = ingest(grid, self.layout, self.aliases)
        except AcquisitionError as err:
            logger.error("sheet acquisition failed: %s", err)
            return IngestOutcome(error=err)
        except IngestError as err:
            logger.error("sheet format is unexpected: %s", err)
            return IngestOutcome(error=err)

        # replace summary and timestamp together
        self._snapshot = (summary, datetime.datetime.now(datetime.timezone.utc))
        return IngestOutcome(summary=summary)
