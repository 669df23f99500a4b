"""Tests for net profit sorting and the toggle-on-click direction."""

from hypothesis import given, strategies as st

from wallet_dashboard.analysis.sorting import sort_indicator, sort_rankings, toggle_sort
from wallet_dashboard.models.ranking import SortOrder, WalletRanking


def _rankings(*profits):
    return [WalletRanking(f"0xwallet{i}", p) for i, p in enumerate(profits)]


def test_sort_ascending_and_descending():
    rankings = _rankings(5.0, -2.0, 10.0)
    assert [r.net_profit for r in sort_rankings(rankings, SortOrder.ASCENDING)] == [-2.0, 5.0, 10.0]
    assert [r.net_profit for r in sort_rankings(rankings, SortOrder.DESCENDING)] == [10.0, 5.0, -2.0]


def test_sort_returns_new_list():
    rankings = _rankings(3.0, 1.0)
    result = sort_rankings(rankings, SortOrder.ASCENDING)
    assert result is not rankings
    assert [r.net_profit for r in rankings] == [3.0, 1.0]


def test_toggle_alternates_direction():
    rankings = _rankings(3.0, 1.0, 2.0)
    first, order = toggle_sort(rankings, SortOrder.ASCENDING)
    assert order is SortOrder.DESCENDING
    assert [r.net_profit for r in first] == [1.0, 2.0, 3.0]

    second, order = toggle_sort(first, order)
    assert order is SortOrder.ASCENDING
    assert [r.net_profit for r in second] == [3.0, 2.0, 1.0]


def test_sort_indicator():
    assert sort_indicator(SortOrder.ASCENDING) == "▲"
    assert sort_indicator(SortOrder.DESCENDING) == "▼"


@given(st.lists(st.floats(allow_nan=False, allow_infinity=False), unique=True, max_size=40))
def test_descending_is_reverse_of_ascending(profits):
    rankings = _rankings(*profits)
    ascending = sort_rankings(rankings, SortOrder.ASCENDING)
    descending = sort_rankings(rankings, SortOrder.DESCENDING)
    assert descending == list(reversed(ascending))
