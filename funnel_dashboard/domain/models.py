"""Domain models for campaign funnel data."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import date
from typing import Any, Mapping, NamedTuple

REQUIRED_COLUMNS: tuple[str, ...] = (
    "Clicks",
    "Cost",
    "Avg. CPC",
    "Installs",
    "Trials",
    "Subscriptions",
    "Subscription Value",
    "Start Date",
    "End Date",
    "Ad Group",
)
INTEGER_COLUMNS: tuple[str, ...] = ("Clicks", "Installs", "Trials", "Subscriptions")
REAL_COLUMNS: tuple[str, ...] = ("Cost", "Avg. CPC", "Subscription Value")
DATE_COLUMNS: tuple[str, ...] = ("Start Date", "End Date")
FUNNEL_STAGES: tuple[str, ...] = ("Clicks", "Installs", "Trials", "Subscriptions")
ALL_AD_GROUPS = "All Ad Groups"

# Source column -> CampaignRecord attribute.
COLUMN_FIELDS: dict[str, str] = {
    "Clicks": "clicks",
    "Cost": "cost",
    "Avg. CPC": "avg_cpc",
    "Installs": "installs",
    "Trials": "trials",
    "Subscriptions": "subscriptions",
    "Subscription Value": "subscription_value",
    "Start Date": "start_date",
    "End Date": "end_date",
    "Ad Group": "ad_group",
}


@dataclass(frozen=True)
class CampaignRecord:
    """One normalized CSV row.

    ``start_date``/``end_date`` are ``None`` when the source text was not a
    recognizable date; such records never satisfy an active date filter.
    """

    id: int
    clicks: int = 0
    cost: float = 0.0
    avg_cpc: float = 0.0
    installs: int = 0
    trials: int = 0
    subscriptions: int = 0
    subscription_value: float = 0.0
    start_date: date | None = None
    end_date: date | None = None
    ad_group: str = ""
    extras: Mapping[str, str] = field(default_factory=dict)

    def value_for(self, column: str) -> Any:
        attr = COLUMN_FIELDS.get(column)
        if attr is not None:
            return getattr(self, attr)
        return self.extras.get(column, "")


@dataclass(frozen=True)
class CampaignDataset:
    records: tuple[CampaignRecord, ...]
    columns: tuple[str, ...] = REQUIRED_COLUMNS
    source_name: str = ""

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class FilterState:
    date_from: date | None = None
    date_to: date | None = None
    ad_group: str = ALL_AD_GROUPS

    @property
    def is_identity(self) -> bool:
        return self.date_from is None and self.ad_group == ALL_AD_GROUPS

    def with_date_range(self, date_from: date | None, date_to: date | None) -> "FilterState":
        return replace(self, date_from=date_from, date_to=date_to)

    def with_ad_group(self, ad_group: str | None) -> "FilterState":
        return replace(self, ad_group=ad_group or ALL_AD_GROUPS)


@dataclass(frozen=True)
class SummaryTotals:
    clicks: int = 0
    cost: float = 0.0
    installs: int = 0
    trials: int = 0
    subscriptions: int = 0
    revenue: float = 0.0
    cpi: float = 0.0
    install_rate: float = 0.0
    install_to_trial_rate: float = 0.0
    trial_cost: float = 0.0
    install_to_paid_rate: float = 0.0
    cac: float = 0.0
    value_cost_ratio: float = 0.0
    overall_conversion: float = 0.0
    roi: float = 0.0
    trial_to_subscription_rate: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class FunnelStage(NamedTuple):
    name: str
    value: float
