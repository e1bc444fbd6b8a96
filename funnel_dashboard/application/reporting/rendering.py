"""Text rendering helpers for the dashboard summary."""

from __future__ import annotations

from datetime import date
from typing import Any, List, Sequence

from funnel_dashboard.application.reporting.metrics import (
    conversion_bars,
    efficiency_cards,
    fmt_count,
    headline_cards,
)
from funnel_dashboard.domain.models import REQUIRED_COLUMNS, CampaignRecord, FilterState, FunnelStage, SummaryTotals


def record_count_text(shown: int, total: int) -> str:
    return f"Showing {shown} of {total} records."


def date_range_text(state: FilterState) -> str:
    if state.date_from is None:
        return "Select Date Range"
    start = state.date_from.strftime("%b %d, %Y")
    end = state.date_to.strftime("%b %d, %Y") if state.date_to is not None else ""
    return f"{start} - {end}"


def preview_cell(column: str, value: Any) -> str:
    if "Date" in column:
        if isinstance(value, date):
            return value.isoformat()
        return "Invalid Date"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return fmt_count(value)
    return "" if value is None else str(value)


def preview_table(records: Sequence[CampaignRecord], limit: int) -> List[List[str]]:
    return [
        [preview_cell(column, record.value_for(column)) for column in REQUIRED_COLUMNS]
        for record in records[:limit]
    ]


def funnel_lines(stages: Sequence[FunnelStage]) -> List[str]:
    return [f"{stage.name}: {fmt_count(stage.value)}" for stage in stages]


def summary_lines(summary: SummaryTotals, stages: Sequence[FunnelStage]) -> List[str]:
    lines: List[str] = []
    for card in [*headline_cards(summary), *efficiency_cards(summary)]:
        lines.append(f"{card.title}: {card.value}")
    lines.append("Acquisition Funnel: " + " -> ".join(funnel_lines(stages)))
    lines.append(
        "Funnel Conversion Rates: "
        + ", ".join(f"{bar.label} {bar.text}" for bar in conversion_bars(summary))
    )
    return lines
