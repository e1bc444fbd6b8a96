"""Load-time errors raised by the ingestion layer."""

from __future__ import annotations

from typing import Sequence


class DatasetLoadError(ValueError):
    """Base class for failures that reject a whole CSV load."""


class ParseError(DatasetLoadError):
    """The file could not be read as CSV."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Error parsing CSV: {detail}")


class SchemaError(DatasetLoadError):
    """Required columns are missing from the header row."""

    def __init__(self, missing_columns: Sequence[str]) -> None:
        self.missing_columns = list(missing_columns)
        super().__init__(f"Missing required columns: {', '.join(self.missing_columns)}")


class RowProcessingError(DatasetLoadError):
    """A row failed normalization; row_number is 1-based and counts the header."""

    def __init__(self, row_number: int, detail: str) -> None:
        self.row_number = row_number
        self.detail = detail
        super().__init__(f"Error processing row {row_number}: {detail}")
