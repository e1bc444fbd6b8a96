"""Infrastructure adapter for CSV read/write through Polars."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, Any, Protocol, Sequence, Union

import polars as pl

from funnel_dashboard.errors import ParseError

logger = logging.getLogger(__name__)

CsvSource = Union[str, Path, bytes, IO[bytes]]
RawTable = tuple[list[str], list[dict[str, Any]]]


class CsvCodec(Protocol):
    def read_table(self, source: CsvSource) -> RawTable: ...

    def write_table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str: ...


def _first_line(exc: Exception) -> str:
    text = str(exc).strip()
    if not text:
        return type(exc).__name__
    return text.splitlines()[0]


def _as_polars_source(source: CsvSource) -> Any:
    if isinstance(source, bytes):
        return io.BytesIO(source)
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Input CSV file not found: {path}")
        return path
    return source


class PolarsCsvCodec:
    """Reads every column as text so normalization owns all type decisions."""

    def __init__(self, encoding: str = "utf8") -> None:
        self.encoding = encoding

    def read_table(self, source: CsvSource) -> RawTable:
        try:
            frame = pl.read_csv(
                _as_polars_source(source),
                has_header=True,
                infer_schema_length=0,
                encoding=self.encoding,
                raise_if_empty=True,
            )
        except pl.exceptions.PolarsError as exc:
            raise ParseError(_first_line(exc)) from exc

        headers = list(frame.columns)
        if headers and headers[0].startswith("\ufeff"):
            headers[0] = headers[0].lstrip("\ufeff")
            frame = frame.rename({frame.columns[0]: headers[0]})
        logger.debug("Read CSV table: columns=%d rows=%d", len(headers), frame.height)
        return headers, list(frame.iter_rows(named=True))

    def read_text(self, text: str) -> RawTable:
        return self.read_table(text.encode("utf-8"))

    def write_table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
        schema = [(str(name), pl.String) for name in headers]
        if rows:
            frame = pl.DataFrame(
                [[None if value is None else str(value) for value in row] for row in rows],
                schema=schema,
                orient="row",
            )
        else:
            frame = pl.DataFrame(schema=schema)
        return frame.write_csv()

