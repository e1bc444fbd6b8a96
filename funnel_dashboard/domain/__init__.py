"""Domain layer package."""

from .aggregation import aggregate, project_funnel, safe_divide, summarize
from .filters import ad_group_options, filter_records
from .models import (
    ALL_AD_GROUPS,
    FUNNEL_STAGES,
    REQUIRED_COLUMNS,
    CampaignDataset,
    CampaignRecord,
    FilterState,
    FunnelStage,
    SummaryTotals,
)

__all__ = [
    "ALL_AD_GROUPS",
    "FUNNEL_STAGES",
    "REQUIRED_COLUMNS",
    "CampaignDataset",
    "CampaignRecord",
    "FilterState",
    "FunnelStage",
    "SummaryTotals",
    "aggregate",
    "summarize",
    "safe_divide",
    "project_funnel",
    "filter_records",
    "ad_group_options",
]
