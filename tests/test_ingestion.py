from __future__ import annotations

from datetime import date

import pytest

from funnel_dashboard.domain.models import REQUIRED_COLUMNS
from funnel_dashboard.errors import ParseError, RowProcessingError, SchemaError
from funnel_dashboard.ingestion import (
    build_dataset,
    load_dataset,
    normalize_row,
    normalize_rows,
    parse_date,
    parse_int,
    parse_real,
    validate_schema,
)


def _raw_row(**overrides):
    row = {
        "Clicks": "100",
        "Cost": "50",
        "Avg. CPC": "0.5",
        "Installs": "20",
        "Trials": "10",
        "Subscriptions": "5",
        "Subscription Value": "20",
        "Start Date": "2024-01-01",
        "End Date": "2024-01-07",
        "Ad Group": "Brand",
    }
    row.update(overrides)
    return row


def test_validate_schema_accepts_required_columns_in_any_order():
    validate_schema(list(reversed(REQUIRED_COLUMNS)) + ["Extra"])


def test_validate_schema_names_missing_subscription_value():
    headers = [column for column in REQUIRED_COLUMNS if column != "Subscription Value"]
    with pytest.raises(SchemaError) as excinfo:
        validate_schema(headers)
    assert excinfo.value.missing_columns == ["Subscription Value"]
    assert "Subscription Value" in str(excinfo.value)


def test_validate_schema_reports_missing_in_required_order():
    with pytest.raises(SchemaError) as excinfo:
        validate_schema(["Ad Group", "clicks", " Cost", "Installs"])
    assert excinfo.value.missing_columns == [
        "Clicks",
        "Cost",
        "Avg. CPC",
        "Trials",
        "Subscriptions",
        "Subscription Value",
        "Start Date",
        "End Date",
    ]


@pytest.mark.parametrize(
    ("text", "expected"),
    [("42", 42), ("", 0), (None, 0), ("abc", 0), ("12abc", 12), ("1.9", 1), ("-3", -3), ("1,200", 1200), (" 7 ", 7)],
)
def test_parse_int(text, expected):
    assert parse_int(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [("2.5", 2.5), ("", 0.0), ("abc", 0.0), ("3.5x", 3.5), (".5", 0.5), ("-1.25", -1.25), ("1e3", 1000.0), ("1e999", 0.0)],
)
def test_parse_real(text, expected):
    assert parse_real(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2024-01-15", date(2024, 1, 15)),
        ("2024-01-15T10:30:00", date(2024, 1, 15)),
        ("01/15/2024", date(2024, 1, 15)),
        ("2024/01/15", date(2024, 1, 15)),
        ("Jan 15, 2024", date(2024, 1, 15)),
        ("15 January 2024", date(2024, 1, 15)),
        ("not a date", None),
        ("2024-02-30", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_date(text, expected):
    assert parse_date(text) == expected


def test_normalize_row_converts_types_and_keeps_passthrough():
    record = normalize_row(_raw_row(Campaign="Winter", Note=None), index=3)
    assert record.id == 3
    assert record.clicks == 100
    assert record.cost == 50.0
    assert record.subscription_value == 20.0
    assert record.start_date == date(2024, 1, 1)
    assert record.ad_group == "Brand"
    assert record.extras == {"Campaign": "Winter", "Note": ""}


def test_normalize_row_tolerates_bad_numbers_and_dates():
    record = normalize_row(_raw_row(Cost="abc", Clicks="", **{"Start Date": "garbage"}), index=0)
    assert record.cost == 0.0
    assert record.clicks == 0
    assert record.start_date is None


def test_normalize_row_keeps_negative_values():
    record = normalize_row(_raw_row(Clicks="-5", Cost="-2.5"), index=0)
    assert record.clicks == -5
    assert record.cost == -2.5


def test_normalize_rows_fails_whole_batch_with_display_row_number():
    rows = [_raw_row(), _raw_row(), ["not", "a", "mapping"]]
    with pytest.raises(RowProcessingError) as excinfo:
        normalize_rows(rows)
    assert excinfo.value.row_number == 4
    assert "row 4" in str(excinfo.value)


def test_normalize_rows_skips_blank_rows():
    blank = {column: None for column in REQUIRED_COLUMNS}
    records = normalize_rows([_raw_row(), blank, _raw_row(Clicks="7")])
    assert [record.id for record in records] == [0, 1]
    assert records[1].clicks == 7


def test_build_dataset_rejects_before_normalizing():
    headers = [column for column in REQUIRED_COLUMNS if column != "Ad Group"]
    with pytest.raises(SchemaError):
        build_dataset(headers, [["bad row"]])


def test_load_dataset_from_bytes(sample_csv_bytes, codec):
    dataset = load_dataset(sample_csv_bytes, codec=codec, source_name="upload.csv")
    assert len(dataset) == 4
    assert dataset.columns[-1] == "Campaign"
    assert dataset.source_name == "upload.csv"

    last = dataset.records[3]
    assert last.clicks == 1200
    assert last.cost == 0.0
    assert last.avg_cpc == 0.0
    assert last.trials == 0
    assert last.start_date is None
    assert last.end_date == date(2024, 3, 7)
    assert last.extras == {"Campaign": ""}


def test_load_dataset_from_path_uses_file_name(tmp_path, sample_csv_bytes):
    path = tmp_path / "campaigns.csv"
    path.write_bytes(sample_csv_bytes)
    dataset = load_dataset(path)
    assert dataset.source_name == "campaigns.csv"
    assert [record.id for record in dataset.records] == [0, 1, 2, 3]


def test_load_dataset_missing_columns(codec):
    with pytest.raises(SchemaError) as excinfo:
        load_dataset(b"Clicks,Cost\n1,2\n", codec=codec)
    assert excinfo.value.missing_columns[0] == "Avg. CPC"


def test_load_dataset_empty_file_is_parse_error(codec):
    with pytest.raises(ParseError):
        load_dataset(b"", codec=codec)
