"""Shared display formatting for dashboard metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from funnel_dashboard.domain.models import SummaryTotals


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def fmt_currency(value: float | None) -> str:
    amount = to_float(value)
    sign = "-" if amount < 0 and round(abs(amount), 2) > 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def fmt_percentage(value: float | None) -> str:
    return f"{to_float(value) * 100:.2f}%"


def fmt_count(value: float | None) -> str:
    number = to_float(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class MetricCard:
    title: str
    value: str
    tooltip: str


@dataclass(frozen=True)
class ConversionBar:
    label: str
    rate: float

    @property
    def text(self) -> str:
        return fmt_percentage(self.rate)

    @property
    def width_pct(self) -> float:
        return max(0.0, min(100.0, self.rate * 100))


def headline_cards(summary: SummaryTotals) -> list[MetricCard]:
    return [
        MetricCard("Total Cost", fmt_currency(summary.cost), "Total spend on acquisition."),
        MetricCard("CAC", fmt_currency(summary.cac), "Customer Acquisition Cost (Cost / Subscriptions)"),
        MetricCard("Total Revenue", fmt_currency(summary.revenue), "Total value from all subscriptions."),
        MetricCard("ROI", fmt_percentage(summary.roi), "Return on Investment ((Revenue - Cost) / Cost)"),
    ]


def efficiency_cards(summary: SummaryTotals) -> list[MetricCard]:
    return [
        MetricCard("Cost Per Install", fmt_currency(summary.cpi), "Cost / Installs"),
        MetricCard("Install Rate", fmt_percentage(summary.install_rate), "Installs / Clicks"),
        MetricCard("Install to Trial %", fmt_percentage(summary.install_to_trial_rate), "Trials / Installs"),
        MetricCard("Trial Cost", fmt_currency(summary.trial_cost), "Cost / Trials"),
    ]


def conversion_bars(summary: SummaryTotals) -> list[ConversionBar]:
    return [
        ConversionBar("Clicks to Install", summary.install_rate),
        ConversionBar("Install to Trial", summary.install_to_trial_rate),
        ConversionBar("Trial to Subscription", summary.trial_to_subscription_rate),
        ConversionBar("Overall Conversion", summary.overall_conversion),
    ]
