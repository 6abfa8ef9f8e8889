"""Fetch a published spreadsheet CSV export and parse it into a grid of rows."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Optional

import requests

from stock_competition.classes.errors import AcquisitionError

logger = logging.getLogger(__name__)


def parse_csv_text(text: str) -> list[list[str]]:
    """Parse CSV text into rows, dropping empty lines."""
    try:
        reader = csv.reader(io.StringIO(text.lstrip("\ufeff"), newline=""), strict=True)
        return [row for row in reader if row]
    except csv.Error as exc:
        raise AcquisitionError(f"Failed to parse CSV format: {exc}", cause=exc) from exc


def read_csv_file(path: str | Path) -> list[list[str]]:
    """Read a local CSV export of the sheet."""
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise AcquisitionError(f"Could not read {path}: {exc}", cause=exc) from exc
    except UnicodeDecodeError as exc:
        raise AcquisitionError(f"{path} is not UTF-8 encoded CSV: {exc}", cause=exc) from exc
    return parse_csv_text(text)


class SheetCsvClient:
    """
    Thin HTTP client for a sheet published as CSV. Every failure surfaces as
    AcquisitionError; there are no retries.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_sec: int = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout_sec = timeout_sec
        self.session = session or requests.Session()

    def fetch_text(self, timeout: Optional[int] = None) -> str:
        to = timeout or self.timeout_sec
        try:
            r = self.session.get(self.url, timeout=to)
        except requests.RequestException as exc:
            raise AcquisitionError(f"Could not connect to the spreadsheet: {exc}", cause=exc) from exc

        logger.debug("fetch_text status=%s url=%s", r.status_code, self.url)
        try:
            r.raise_for_status()
        except requests.HTTPError as exc:
            raise AcquisitionError(
                f"Could not fetch spreadsheet data (HTTP {r.status_code}).", cause=exc
            ) from exc
        try:
            return r.content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise AcquisitionError(f"Spreadsheet response is not UTF-8 encoded CSV: {exc}", cause=exc) from exc

    def fetch_grid(self, timeout: Optional[int] = None) -> list[list[str]]:
        return parse_csv_text(self.fetch_text(timeout))
