"""CSV export of filtered records and the blank input template."""

from __future__ import annotations

from datetime import date
from typing import Any, Sequence

from funnel_dashboard.domain.models import REQUIRED_COLUMNS, CampaignRecord
from funnel_dashboard.infrastructure.csv_repository import CsvCodec, PolarsCsvCodec


def export_columns(records: Sequence[CampaignRecord], columns: Sequence[str] | None = None) -> list[str]:
    if columns is not None:
        return list(columns)
    ordered = list(REQUIRED_COLUMNS)
    seen = set(ordered)
    for record in records:
        for name in record.extras:
            if name not in seen:
                seen.add(name)
                ordered.append(name)
    return ordered


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def serialize_records(
    records: Sequence[CampaignRecord],
    codec: CsvCodec | None = None,
    columns: Sequence[str] | None = None,
) -> str:
    """Render records as CSV text that re-imports to equal CampaignRecords."""
    active = codec or PolarsCsvCodec()
    headers = export_columns(records, columns)
    rows = [[format_cell(record.value_for(column)) for column in headers] for record in records]
    return active.write_table(headers, rows)


def template_csv(codec: CsvCodec | None = None) -> str:
    active = codec or PolarsCsvCodec()
    return active.write_table(list(REQUIRED_COLUMNS), [])
