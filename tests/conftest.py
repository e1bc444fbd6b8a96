from __future__ import annotations

from datetime import date

import pytest

from funnel_dashboard.domain.models import CampaignRecord
from funnel_dashboard.infrastructure.csv_repository import PolarsCsvCodec

HEADER = "Clicks,Cost,Avg. CPC,Installs,Trials,Subscriptions,Subscription Value,Start Date,End Date,Ad Group,Campaign"

SAMPLE_CSV = "\n".join(
    [
        HEADER,
        "100,50,0.5,20,10,5,20,2024-01-01,2024-01-07,Brand,Winter Push",
        "200,80.25,0.40125,30,12,4,25.5,2024-01-08,2024-01-14,Generic,Always On",
        "50,10,0.2,5,2,1,30,2024-02-01,2024-02-07,Brand,Winter Push",
        "\"1,200\",abc,,7,,2,9.99,not a date,2024-03-07,Retargeting,",
    ]
) + "\n"


@pytest.fixture
def codec() -> PolarsCsvCodec:
    return PolarsCsvCodec()


@pytest.fixture
def sample_csv_bytes() -> bytes:
    return SAMPLE_CSV.encode("utf-8")


@pytest.fixture
def make_record():
    def _make(record_id: int = 0, **overrides) -> CampaignRecord:
        fields = {
            "clicks": 100,
            "cost": 50.0,
            "avg_cpc": 0.5,
            "installs": 20,
            "trials": 10,
            "subscriptions": 5,
            "subscription_value": 20.0,
            "start_date": date(2024, 1, 1),
            "end_date": date(2024, 1, 7),
            "ad_group": "Brand",
        }
        fields.update(overrides)
        return CampaignRecord(id=record_id, **fields)

    return _make
