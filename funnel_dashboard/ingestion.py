"""CSV ingestion: schema validation and row normalization into CampaignRecords."""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping, Sequence

from funnel_dashboard.domain.models import (
    COLUMN_FIELDS,
    DATE_COLUMNS,
    INTEGER_COLUMNS,
    REAL_COLUMNS,
    REQUIRED_COLUMNS,
    CampaignDataset,
    CampaignRecord,
)
from funnel_dashboard.errors import RowProcessingError, SchemaError
from funnel_dashboard.infrastructure.csv_repository import CsvCodec, CsvSource, PolarsCsvCodec

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")
_REAL_PATTERN = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$")
DATE_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)
# First data row is line 2 of the file when counting from 1 with a header.
ROW_NUMBER_OFFSET = 2


def validate_schema(headers: Sequence[str]) -> None:
    present = set(headers)
    missing = [column for column in REQUIRED_COLUMNS if column not in present]
    if missing:
        raise SchemaError(missing)


def _metric_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().replace(",", "")


def parse_int(value: Any) -> int:
    match = _INT_PATTERN.match(_metric_text(value))
    if match is None:
        return 0
    return int(match.group(1))


def parse_real(value: Any) -> float:
    match = _REAL_PATTERN.match(_metric_text(value))
    if match is None:
        return 0.0
    parsed = float(match.group(1))
    if not math.isfinite(parsed):
        return 0.0
    return parsed or 0.0


def parse_date(value: Any) -> date | None:
    """Return a calendar date, or None when the text is not a recognizable date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = "" if value is None else str(value).strip()
    if not text:
        return None

    iso = _ISO_DATE_PATTERN.match(text)
    if iso is not None:
        try:
            return date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))
        except ValueError:
            return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _passthrough_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def normalize_row(raw: Mapping[str, Any], index: int) -> CampaignRecord:
    try:
        fields: dict[str, Any] = {}
        for column in INTEGER_COLUMNS:
            fields[COLUMN_FIELDS[column]] = parse_int(raw.get(column))
        for column in REAL_COLUMNS:
            fields[COLUMN_FIELDS[column]] = parse_real(raw.get(column))
        for column in DATE_COLUMNS:
            fields[COLUMN_FIELDS[column]] = parse_date(raw.get(column))
        fields["ad_group"] = _passthrough_text(raw.get("Ad Group"))
        extras = {
            str(name): _passthrough_text(value)
            for name, value in raw.items()
            if name not in COLUMN_FIELDS
        }
        return CampaignRecord(id=index, extras=extras, **fields)
    except Exception as exc:
        raise RowProcessingError(index + ROW_NUMBER_OFFSET, str(exc) or type(exc).__name__) from exc


def _is_blank_row(raw: Any) -> bool:
    if not isinstance(raw, Mapping):
        return False
    return all(value is None or str(value).strip() == "" for value in raw.values())


def normalize_rows(rows: Sequence[Mapping[str, Any]]) -> tuple[CampaignRecord, ...]:
    kept = [raw for raw in rows if not _is_blank_row(raw)]
    if len(kept) != len(rows):
        logger.debug("Skipped %d empty rows", len(rows) - len(kept))
    return tuple(normalize_row(raw, index) for index, raw in enumerate(kept))


def build_dataset(
    headers: Sequence[str],
    rows: Sequence[Mapping[str, Any]],
    source_name: str = "",
) -> CampaignDataset:
    """Validate headers, then normalize every row; any failure rejects the whole table."""
    validate_schema(headers)
    records = normalize_rows(rows)
    invalid_dates = sum(1 for record in records if record.start_date is None)
    if invalid_dates:
        logger.warning(
            "%d of %d rows have an unrecognized Start Date and will be excluded by date filters",
            invalid_dates,
            len(records),
        )
    return CampaignDataset(records=records, columns=tuple(headers), source_name=source_name)


def load_dataset(source: CsvSource, codec: CsvCodec | None = None, source_name: str = "") -> CampaignDataset:
    active = codec or PolarsCsvCodec()
    headers, rows = active.read_table(source)
    if not source_name and isinstance(source, (str, Path)):
        source_name = Path(source).name
    dataset = build_dataset(headers, rows, source_name=source_name)
    logger.info("Loaded dataset %s: %d records", source_name or "<upload>", len(dataset))
    return dataset
