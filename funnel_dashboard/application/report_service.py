"""Report pipeline: load a CSV, apply filters, write every report artifact."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Sequence

import polars as pl

from funnel_dashboard.application.dashboard_service import DashboardSession
from funnel_dashboard.application.reporting.metrics import conversion_bars, efficiency_cards, headline_cards
from funnel_dashboard.config import Settings
from funnel_dashboard.domain.aggregation import project_funnel
from funnel_dashboard.domain.models import (
    DATE_COLUMNS,
    INTEGER_COLUMNS,
    REAL_COLUMNS,
    REQUIRED_COLUMNS,
    CampaignRecord,
    FilterState,
    FunnelStage,
    SummaryTotals,
)
from funnel_dashboard.errors import DatasetLoadError
from funnel_dashboard.infrastructure.csv_repository import PolarsCsvCodec
from funnel_dashboard.infrastructure.report_exporter import save_csv_text, save_output_workbook, save_summary_json
from funnel_dashboard.reporting import write_html_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportResult:
    summary: SummaryTotals
    stages: List[FunnelStage]
    shown_records: int
    total_records: int
    output_paths: Dict[str, Path]
    excel_saved: bool
    excel_error_message: str = ""
    stage_timings: List[tuple[str, float]] = field(default_factory=list)


def _records_frame(records: Sequence[CampaignRecord], columns: Sequence[str]) -> pl.DataFrame:
    schema: Dict[str, Any] = {}
    for column in columns:
        if column in INTEGER_COLUMNS:
            schema[column] = pl.Int64
        elif column in REAL_COLUMNS:
            schema[column] = pl.Float64
        elif column in DATE_COLUMNS:
            schema[column] = pl.Date
        else:
            schema[column] = pl.String
    rows = [[record.value_for(column) for column in columns] for record in records]
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema, orient="row")


def _summary_frame(summary: SummaryTotals) -> pl.DataFrame:
    cards = [*headline_cards(summary), *efficiency_cards(summary)]
    return pl.DataFrame(
        {
            "Metric": [card.title for card in cards] + [bar.label for bar in conversion_bars(summary)],
            "Value": [card.value for card in cards] + [bar.text for bar in conversion_bars(summary)],
        }
    )


def _funnel_frame(stages: Sequence[FunnelStage]) -> pl.DataFrame:
    return pl.DataFrame(
        {"Stage": [stage.name for stage in stages], "Value": [float(stage.value) for stage in stages]},
        schema={"Stage": pl.String, "Value": pl.Float64},
    )


def build_summary_payload(session: DashboardSession) -> Dict[str, Any]:
    dataset = session.dataset
    summary = session.summary()
    return {
        "source": dataset.source_name if dataset is not None else "",
        "filters": {
            "date_from": session.filters.date_from,
            "date_to": session.filters.date_to,
            "ad_group": session.filters.ad_group,
        },
        "records_total": len(session.records),
        "records_shown": len(session.filtered_records()),
        "summary": summary.to_dict(),
        "funnel": [stage._asdict() for stage in project_funnel(summary)],
        "ad_groups": session.ad_group_options(),
    }


def run_reporting_pipeline(
    input_path: Path,
    filters: FilterState | None = None,
    settings: Settings | None = None,
) -> ReportResult:
    """Run load -> filter -> aggregate and save CSV/JSON/HTML/Excel outputs.

    Raises DatasetLoadError when the input is rejected; nothing is written then.
    """
    active_settings = settings or Settings.from_env()
    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: list[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    session = DashboardSession(
        codec=PolarsCsvCodec(encoding=active_settings.csv_encoding),
        preview_rows=active_settings.preview_rows,
    )
    if not session.load_csv(input_path):
        raise session.last_load_error or DatasetLoadError(session.error or "CSV load failed")
    if filters is not None:
        session.set_filters(filters)
    _mark("load_dataset")

    filtered = session.filtered_records()
    summary = session.summary()
    stages = session.funnel()
    _mark("aggregate")

    output_dir = active_settings.output_dir
    output_paths = {
        "csv": output_dir / "report.csv",
        "json": output_dir / "summary.json",
        "html": output_dir / "summary.html",
        "excel": output_dir / "summary.xlsx",
    }
    save_csv_text(output_paths["csv"], session.export_report())
    save_summary_json(output_paths["json"], build_summary_payload(session))
    write_html_report(
        output_paths["html"],
        summary=summary,
        stages=stages,
        records=filtered,
        total_records=len(session.records),
        filters=session.filters,
        source_name=session.dataset.source_name if session.dataset is not None else "",
        preview_rows=active_settings.preview_rows,
    )
    _mark("save_csv_json_html")

    columns = session.dataset.columns if session.dataset is not None else REQUIRED_COLUMNS
    excel_saved, excel_error_message = save_output_workbook(
        output_paths["excel"],
        {
            "records": _records_frame(filtered, columns),
            "summary": _summary_frame(summary),
            "funnel": _funnel_frame(stages),
        },
    )
    _mark("save_excel")
    logger.info("Report written to %s (%d of %d records)", output_dir, len(filtered), len(session.records))

    return ReportResult(
        summary=summary,
        stages=stages,
        shown_records=len(filtered),
        total_records=len(session.records),
        output_paths=output_paths,
        excel_saved=excel_saved,
        excel_error_message=excel_error_message,
        stage_timings=stage_timings,
    )
