"""Date-range and ad-group filtering over normalized records."""

from __future__ import annotations

from typing import Iterable, Sequence

from funnel_dashboard.domain.models import ALL_AD_GROUPS, CampaignRecord, FilterState


def in_date_range(record: CampaignRecord, state: FilterState) -> bool:
    # Only start_date is compared, and date_to is ignored while date_from is unset.
    if state.date_from is None:
        return True
    start = record.start_date
    if start is None:
        return False
    if start < state.date_from:
        return False
    return state.date_to is None or start <= state.date_to


def in_ad_group(record: CampaignRecord, state: FilterState) -> bool:
    return state.ad_group == ALL_AD_GROUPS or record.ad_group == state.ad_group


def filter_records(records: Iterable[CampaignRecord], state: FilterState) -> list[CampaignRecord]:
    return [record for record in records if in_date_range(record, state) and in_ad_group(record, state)]


def ad_group_options(records: Sequence[CampaignRecord]) -> list[str]:
    options = [ALL_AD_GROUPS]
    seen: set[str] = set()
    for record in records:
        if record.ad_group in seen:
            continue
        seen.add(record.ad_group)
        options.append(record.ad_group)
    return options
