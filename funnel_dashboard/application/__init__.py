"""Application layer package."""

from .dashboard_service import DashboardSession
from .report_service import ReportResult, run_reporting_pipeline

__all__ = ["DashboardSession", "ReportResult", "run_reporting_pipeline"]
