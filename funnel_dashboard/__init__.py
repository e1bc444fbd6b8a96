"""Campaign funnel dashboard package."""

from .application import DashboardSession, ReportResult, run_reporting_pipeline
from .domain import FilterState, aggregate, filter_records, project_funnel, safe_divide
from .errors import DatasetLoadError, ParseError, RowProcessingError, SchemaError
from .export import serialize_records, template_csv
from .ingestion import load_dataset, normalize_row, validate_schema

__all__ = [
    "DashboardSession",
    "ReportResult",
    "run_reporting_pipeline",
    "FilterState",
    "aggregate",
    "filter_records",
    "project_funnel",
    "safe_divide",
    "DatasetLoadError",
    "ParseError",
    "RowProcessingError",
    "SchemaError",
    "serialize_records",
    "template_csv",
    "load_dataset",
    "normalize_row",
    "validate_schema",
]
