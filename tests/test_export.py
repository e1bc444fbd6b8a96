from __future__ import annotations

from datetime import date

from funnel_dashboard.domain.models import REQUIRED_COLUMNS
from funnel_dashboard.export import export_columns, format_cell, serialize_records, template_csv
from funnel_dashboard.ingestion import build_dataset, load_dataset


def test_format_cell():
    assert format_cell(50.0) == "50"
    assert format_cell(0.1) == "0.1"
    assert format_cell(-3) == "-3"
    assert format_cell(date(2024, 1, 5)) == "2024-01-05"
    assert format_cell(None) == ""
    assert format_cell("Brand") == "Brand"


def test_export_columns_default_appends_passthrough(make_record):
    records = [
        make_record(0, extras={"Campaign": "A"}),
        make_record(1, extras={"Campaign": "B", "Region": "EU"}),
    ]
    assert export_columns(records) == [*REQUIRED_COLUMNS, "Campaign", "Region"]


def test_serialize_has_header_and_rows(make_record, codec):
    text = serialize_records([make_record(0, extras={"Campaign": "Spring, 2024"})], codec=codec)
    lines = text.strip().splitlines()
    assert lines[0].split(",")[:3] == ["Clicks", "Cost", "Avg. CPC"]
    assert lines[1].startswith("100,50,0.5,20,10,5,20,2024-01-01,2024-01-07,Brand,")
    assert '"Spring, 2024"' in lines[1]


def test_round_trip_reproduces_records(sample_csv_bytes, codec):
    original = load_dataset(sample_csv_bytes, codec=codec)
    exported = serialize_records(original.records, codec=codec, columns=original.columns)
    headers, rows = codec.read_text(exported)
    reloaded = build_dataset(headers, rows)

    assert reloaded.columns == original.columns
    assert reloaded.records == original.records


def test_round_trip_of_filtered_subset_keeps_values(make_record, codec):
    records = [
        make_record(0, cost=12.345, avg_cpc=0.123456789, start_date=None, extras={"Note": ""}),
        make_record(1, clicks=-2, subscription_value=1e-7, extras={"Note": "x"}),
    ]
    headers, rows = codec.read_text(serialize_records(records, codec=codec))
    reloaded = build_dataset(headers, rows).records
    assert reloaded == tuple(records)


def test_template_has_only_required_header(codec):
    text = template_csv(codec)
    headers, rows = codec.read_text(text)
    assert headers == list(REQUIRED_COLUMNS)
    assert rows == []
