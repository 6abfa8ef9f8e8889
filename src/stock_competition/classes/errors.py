"""Errors raised while turning a competition sheet into a leaderboard."""


class IngestError(Exception):
    """Base class for failures that abort a whole refresh."""


class AcquisitionError(IngestError):
    """The raw grid could not be fetched or parsed into rows."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StructuralError(IngestError):
    """The grid is too short to hold the summary block."""

    def __init__(self, row_count: int, minimum_rows: int) -> None:
        super().__init__(f"Sheet has {row_count} rows; at least {minimum_rows} are required.")
        self.row_count = row_count
        self.minimum_rows = minimum_rows
