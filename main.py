"""Campaign funnel dashboard entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import List, Sequence

from funnel_dashboard.application.report_service import run_reporting_pipeline
from funnel_dashboard.application.reporting.rendering import date_range_text, record_count_text, summary_lines
from funnel_dashboard.config import Settings
from funnel_dashboard.domain.models import ALL_AD_GROUPS, FilterState
from funnel_dashboard.errors import DatasetLoadError
from funnel_dashboard.export import template_csv
from funnel_dashboard.infrastructure.report_exporter import save_csv_text
from funnel_dashboard.ingestion import parse_date


def _date_arg(value: str) -> date:
    parsed = parse_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"Unrecognized date: {value}")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute marketing-funnel metrics from a campaign CSV.")
    parser.add_argument("input", nargs="?", type=Path, help="Campaign performance CSV")
    parser.add_argument("--from", dest="date_from", type=_date_arg, help="Earliest Start Date to include")
    parser.add_argument("--to", dest="date_to", type=_date_arg, help="Latest Start Date to include")
    parser.add_argument("--ad-group", default=ALL_AD_GROUPS, help="Only include this Ad Group")
    parser.add_argument("--output-dir", type=Path, help="Overrides FUNNEL_OUTPUT_DIR")
    parser.add_argument("--template", type=Path, help="Write an empty CSV template to this path and exit")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()
    if args.output_dir is not None:
        settings = replace(settings, output_dir=args.output_dir)
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.template is not None:
        save_csv_text(args.template, template_csv())
        print(f"Saved template: {args.template}")
        return 0
    if args.input is None:
        parser.error("an input CSV is required unless --template is given")

    filters = FilterState(date_from=args.date_from, date_to=args.date_to, ad_group=args.ad_group)
    try:
        result = run_reporting_pipeline(args.input, filters=filters, settings=settings)
    except (DatasetLoadError, FileNotFoundError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    lines: List[str] = [
        f"Filters: {date_range_text(filters)} | Ad Group: {filters.ad_group}",
        record_count_text(result.shown_records, result.total_records),
        *summary_lines(result.summary, result.stages),
    ]
    for line in lines:
        print(line)
    stage_text = ", ".join([f"{name}={seconds:.3f}s" for name, seconds in result.stage_timings])
    print(f"Stage Timing: {stage_text}")
    print(f"Saved CSV: {result.output_paths['csv']}")
    print(f"Saved JSON: {result.output_paths['json']}")
    print(f"Saved HTML: {result.output_paths['html']}")
    if result.excel_saved:
        print(f"Saved Excel: {result.output_paths['excel']}")
    else:
        print(f"Excel save skipped (file may be open/locked): {result.excel_error_message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
