"""Tests for joining the monthly buy/sell/count maps."""

import pytest

from wallet_dashboard.analysis.time_series import (
    aggregate_monthly,
    aggregate_summary,
    extract_monthly_maps,
    parse_month,
)
from wallet_dashboard.errors import MalformedMonthValueError, MissingJoinKeyError
from wallet_dashboard.models.series import MonthlyAggregate


def test_summary_end_to_end():
    summary = {
        "totalBuyAmounts": {"month": {"2024-03": 300, "2024-01": 100}},
        "totalSellAmounts": {"month": {"2024-01": 50, "2024-03": 150}},
        "totalBuySellTimes": {"month": {"2024-01": 4}},
    }
    assert aggregate_summary(summary) == [
        MonthlyAggregate("2024-01", 100, 50, 4),
        MonthlyAggregate("2024-03", 300, 150, 0),
    ]


def test_sorts_by_parsed_month():
    buy = {"2024-10": 1, "2023-12": 2, "2024-02": 3}
    sell = {"2024-10": 0, "2023-12": 0, "2024-02": 0}
    months = [m.month for m in aggregate_monthly(buy, sell, {})]
    assert months == ["2023-12", "2024-02", "2024-10"]


def test_buy_map_drives_the_join():
    buy = {"2024-01": 10}
    sell = {"2024-01": 5, "2024-02": 7}
    count = {"2024-01": 1, "2024-05": 9}
    series = aggregate_monthly(buy, sell, count)
    assert [m.month for m in series] == ["2024-01"]


def test_missing_sell_entry_raises():
    with pytest.raises(MissingJoinKeyError) as exc_info:
        aggregate_monthly({"2024-01": 10, "2024-02": 20}, {"2024-01": 5}, {})
    assert exc_info.value.month == "2024-02"


def test_null_count_defaults_to_zero():
    series = aggregate_monthly({"2024-01": 1}, {"2024-01": 1}, {"2024-01": None})
    assert series[0].total_transactions == 0


def test_numeric_strings_are_coerced():
    series = aggregate_monthly({"2024-01": "12.5"}, {"2024-01": "3"}, {"2024-01": "7"})
    assert series[0] == MonthlyAggregate("2024-01", 12.5, 3.0, 7)


def test_malformed_month_sorted_after_valid_months():
    buy = {"not-a-month": 1, "2024-02": 2, "2024-01": 3}
    sell = {"not-a-month": 0, "2024-02": 0, "2024-01": 0}
    months = [m.month for m in aggregate_monthly(buy, sell, {})]
    assert months[:2] == ["2024-01", "2024-02"]
    assert months[2] == "not-a-month"


def test_empty_maps():
    assert aggregate_monthly({}, {}, {}) == []
    assert aggregate_summary({}) == []
    assert aggregate_summary(None) == []


def test_extract_missing_keys_are_empty_maps():
    buy, sell, count = extract_monthly_maps({"totalBuyAmounts": {"month": {"2024-01": 1}}})
    assert buy == {"2024-01": 1}
    assert sell == {}
    assert count == {}


def test_extract_tolerates_null_sections():
    assert extract_monthly_maps({"totalBuyAmounts": None, "totalSellAmounts": {}}) == ({}, {}, {})


def test_parse_month():
    assert parse_month("2024-01").year == 2024
    assert parse_month("2024-01").month == 1
    assert parse_month("garbage") is None


@pytest.mark.parametrize(
    "buy, sell, count",
    [
        ({"2024-01": None}, {"2024-01": 1}, {}),
        ({"2024-01": 1}, {"2024-01": "abc"}, {}),
        ({"2024-01": 1}, {"2024-01": 1}, {"2024-01": "4.5"}),
    ],
)
def test_non_numeric_value_raises(buy, sell, count):
    with pytest.raises(MalformedMonthValueError) as exc_info:
        aggregate_monthly(buy, sell, count)
    assert exc_info.value.month == "2024-01"
