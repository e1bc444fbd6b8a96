"""Funnel totals, derived ratios and stage projection."""

from __future__ import annotations

from typing import Iterable

from funnel_dashboard.domain.filters import filter_records
from funnel_dashboard.domain.models import (
    FUNNEL_STAGES,
    CampaignRecord,
    FilterState,
    FunnelStage,
    SummaryTotals,
)


def safe_divide(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


def aggregate(records: Iterable[CampaignRecord]) -> SummaryTotals:
    clicks = 0
    cost = 0.0
    installs = 0
    trials = 0
    subscriptions = 0
    revenue = 0.0
    for record in records:
        clicks += record.clicks
        cost += record.cost
        installs += record.installs
        trials += record.trials
        subscriptions += record.subscriptions
        # Weighted by subscription count, not a plain sum of the value column.
        revenue += record.subscriptions * record.subscription_value

    return SummaryTotals(
        clicks=clicks,
        cost=cost,
        installs=installs,
        trials=trials,
        subscriptions=subscriptions,
        revenue=revenue,
        cpi=safe_divide(cost, installs),
        install_rate=safe_divide(installs, clicks),
        install_to_trial_rate=safe_divide(trials, installs),
        trial_cost=safe_divide(cost, trials),
        install_to_paid_rate=safe_divide(subscriptions, installs),
        cac=safe_divide(cost, subscriptions),
        value_cost_ratio=safe_divide(revenue, cost),
        overall_conversion=safe_divide(subscriptions, clicks),
        roi=safe_divide(revenue - cost, cost),
        trial_to_subscription_rate=safe_divide(subscriptions, trials),
    )


def summarize(records: Iterable[CampaignRecord], state: FilterState) -> SummaryTotals:
    return aggregate(filter_records(records, state))


_STAGE_FIELDS: dict[str, str] = {
    "Clicks": "clicks",
    "Installs": "installs",
    "Trials": "trials",
    "Subscriptions": "subscriptions",
}


def project_funnel(summary: SummaryTotals) -> list[FunnelStage]:
    """Map totals onto the fixed stage order; monotonicity is not enforced."""
    return [FunnelStage(name=stage, value=getattr(summary, _STAGE_FIELDS[stage])) for stage in FUNNEL_STAGES]
