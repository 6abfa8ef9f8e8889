"""Row and column positions of the competition sheet, plus the name alias table.

The sheet has two blocks. The summary block sits at the top: row 0 holds the
participant names (one per column after the label column), rows 1-10 hold the
raw stock symbols, and rows 11-13 hold portfolio value, day change and total
return. Further down, an optional detail block per participant starts at the
row whose first cell is the participant's name; its stock rows begin two rows
below that and carry per-stock prices and returns.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

TOTALS_SENTINEL = "TOTALS"
SYMBOL_HEADER_SENTINEL = "Symbol"
TBD_SENTINEL = "TBD"


class HoldingsSource(enum.Enum):
    """Which block a participant's holdings were read from."""

    DETAIL = "detail"
    SUMMARY = "summary"


@dataclass(frozen=True)
class SheetLayout:
    header_row: int = 0
    label_col: int = 0
    participant_slots: int = 18

    summary_symbol_first_row: int = 1
    summary_symbol_rows: int = 10
    portfolio_value_row: int = 11
    day_change_row: int = 12
    total_return_row: int = 13

    detail_first_stock_offset: int = 2
    detail_max_rows: int = 10
    detail_symbol_col: int = 0
    detail_buy_price_col: int = 2
    detail_current_price_col: int = 3
    detail_return_col: int = 9
    detail_reason_col: int = 11

    @property
    def minimum_rows(self) -> int:
        return self.total_return_row + 1

    @property
    def participant_columns(self) -> range:
        first = self.label_col + 1
        return range(first, first + self.participant_slots)

    @property
    def summary_symbol_row_range(self) -> range:
        first = self.summary_symbol_first_row
        return range(first, first + self.summary_symbol_rows)

    def detail_stock_rows(self, start_row: int) -> range:
        first = start_row + self.detail_first_stock_offset
        return range(first, first + self.detail_max_rows)


DEFAULT_LAYOUT = SheetLayout()


@dataclass(frozen=True)
class AliasTable:
    """Canonical participant name -> other spellings used for the same person."""

    aliases: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def spellings(self, name: str) -> tuple[str, ...]:
        return (name, *self.aliases.get(name, ()))

    def match(self, cell: str, names: Iterable[str]) -> str | None:
        """Return the participant name that cell spells, if any.

        A literal name match wins over an alias match.
        """
        candidates = list(names)
        if cell in candidates:
            return cell
        for name in candidates:
            if cell in self.aliases.get(name, ()):
                return name
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> AliasTable:
        aliases: dict[str, tuple[str, ...]] = {}
        for canonical, spellings in data.items():
            if isinstance(spellings, str):
                spellings = [spellings]
            if not isinstance(spellings, (list, tuple)):
                raise ValueError(f"Aliases for '{canonical}' must be a string or a list")
            cleaned = tuple(str(s).strip() for s in spellings if str(s).strip())
            if cleaned:
                aliases[str(canonical).strip()] = cleaned
        return cls(aliases)


DEFAULT_ALIASES = AliasTable({"Lisa": ("Lisa Sweeter Hanson",)})


def load_alias_table(path: Path, default: AliasTable = DEFAULT_ALIASES) -> AliasTable:
    """Load aliases from a YAML mapping of canonical name to spelling(s)."""
    if not path.is_file():
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping")
        return AliasTable.from_mapping(data)
    except (OSError, yaml.YAMLError, ValueError) as err:
        logger.warning("Ignoring alias file %s [%s]", path, err)
        return default
