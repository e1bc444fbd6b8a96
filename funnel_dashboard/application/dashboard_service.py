"""Application service holding one loaded dataset and its filter state."""

from __future__ import annotations

import logging
from datetime import date
from typing import List

from funnel_dashboard.application.reporting.rendering import preview_table, record_count_text
from funnel_dashboard.domain.aggregation import aggregate, project_funnel
from funnel_dashboard.domain.filters import ad_group_options, filter_records
from funnel_dashboard.domain.models import CampaignDataset, CampaignRecord, FilterState, FunnelStage, SummaryTotals
from funnel_dashboard.errors import DatasetLoadError
from funnel_dashboard.export import serialize_records, template_csv
from funnel_dashboard.infrastructure.csv_repository import CsvCodec, CsvSource, PolarsCsvCodec
from funnel_dashboard.ingestion import load_dataset

logger = logging.getLogger(__name__)


class DashboardSession:
    """Single-session state: at most one dataset and one filter state.

    Derived views (filtered records, summary, funnel) are recomputed from the
    base dataset on every call and never written back.
    """

    def __init__(self, codec: CsvCodec | None = None, preview_rows: int = 10) -> None:
        self.codec: CsvCodec = codec or PolarsCsvCodec()
        self.preview_rows = preview_rows
        self.dataset: CampaignDataset | None = None
        self.filters = FilterState()
        self.error: str | None = None
        self.last_load_error: DatasetLoadError | None = None

    @property
    def has_data(self) -> bool:
        return self.dataset is not None

    @property
    def records(self) -> tuple[CampaignRecord, ...]:
        if self.dataset is None:
            return ()
        return self.dataset.records

    def load_csv(self, source: CsvSource, source_name: str = "") -> bool:
        """Replace the dataset on success; on failure keep it and record the message."""
        try:
            dataset = load_dataset(source, codec=self.codec, source_name=source_name)
        except DatasetLoadError as exc:
            self.error = str(exc)
            self.last_load_error = exc
            logger.warning("CSV load rejected: %s", exc)
            return False
        self.dataset = dataset
        self.filters = FilterState()
        self.error = None
        self.last_load_error = None
        return True

    def reset(self) -> None:
        self.dataset = None
        self.filters = FilterState()
        self.error = None
        self.last_load_error = None

    def set_filters(self, filters: FilterState) -> None:
        self.filters = filters

    def set_date_range(self, date_from: date | None, date_to: date | None) -> None:
        self.filters = self.filters.with_date_range(date_from, date_to)

    def set_ad_group(self, ad_group: str | None) -> None:
        self.filters = self.filters.with_ad_group(ad_group)

    def clear_filters(self) -> None:
        self.filters = FilterState()

    def filtered_records(self) -> List[CampaignRecord]:
        return filter_records(self.records, self.filters)

    def summary(self) -> SummaryTotals:
        return aggregate(self.filtered_records())

    def funnel(self) -> List[FunnelStage]:
        return project_funnel(self.summary())

    def ad_group_options(self) -> List[str]:
        return ad_group_options(self.records)

    def record_count_text(self) -> str:
        return record_count_text(len(self.filtered_records()), len(self.records))

    def preview_rows_table(self) -> List[List[str]]:
        return preview_table(self.filtered_records(), self.preview_rows)

    def export_report(self) -> str:
        columns = self.dataset.columns if self.dataset is not None else None
        return serialize_records(self.filtered_records(), codec=self.codec, columns=columns)

    def export_template(self) -> str:
        return template_csv(self.codec)
