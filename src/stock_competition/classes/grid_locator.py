"""Find participant columns and detail blocks in a raw sheet grid."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from .cell_parsing import cell_text
from .sheet_layout import DEFAULT_ALIASES, DEFAULT_LAYOUT, AliasTable, SheetLayout

logger = logging.getLogger(__name__)

RawGrid = Sequence[Sequence[str | None]]


@dataclass(frozen=True)
class GridLocation:
    participants: tuple[tuple[str, int], ...]
    detail_start_rows: Mapping[str, int] = field(default_factory=dict)

    @property
    def participant_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.participants)


def find_participants(grid: RawGrid, layout: SheetLayout = DEFAULT_LAYOUT) -> tuple[tuple[str, int], ...]:
    """Read (name, column) pairs from the header row, skipping blank names."""
    header = grid[layout.header_row] if len(grid) > layout.header_row else None
    participants: list[tuple[str, int]] = []
    for col in layout.participant_columns:
        name = cell_text(header, col)
        if name:
            participants.append((name, col))
    return tuple(participants)


def find_detail_start_rows(
    grid: RawGrid,
    names: Sequence[str],
    layout: SheetLayout = DEFAULT_LAYOUT,
    aliases: AliasTable = DEFAULT_ALIASES,
) -> dict[str, int]:
    """Map each participant to the row that opens their detail block.

    A row opens a block when its first cell is the participant's name or a known
    alias of it. When several rows match, the last one wins.
    """
    start_rows: dict[str, int] = {}
    if not names:
        return start_rows
    for row_idx, row in enumerate(grid):
        if row_idx == layout.header_row:
            continue
        first_cell = cell_text(row, layout.label_col)
        if not first_cell:
            continue
        name = aliases.match(first_cell, names)
        if name is None:
            continue
        if name in start_rows:
            logger.debug("duplicate detail block for %s: row %d replaces row %d", name, row_idx, start_rows[name])
        else:
            logger.debug("detail block for %s at row %d", name, row_idx)
        start_rows[name] = row_idx
    return start_rows


def locate(
    grid: RawGrid,
    layout: SheetLayout = DEFAULT_LAYOUT,
    aliases: AliasTable = DEFAULT_ALIASES,
) -> GridLocation:
    participants = find_participants(grid, layout)
    names = [name for name, _ in participants]
    return GridLocation(
        participants=participants,
        detail_start_rows=find_detail_start_rows(grid, names, layout, aliases),
    )
