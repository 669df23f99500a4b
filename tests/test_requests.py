"""Tests for the request runner and view loaders, using fake fetches."""

import asyncio

import pytest

from wallet_dashboard.errors import FetchFailure, MissingJoinKeyError
from wallet_dashboard.models.ranking import WalletRanking
from wallet_dashboard.analysis.time_series import aggregate_summary
from wallet_dashboard.models.series import MonthlyAggregate
from wallet_dashboard.state.requests import RequestRunner, load_detail_view, load_list_view
from wallet_dashboard.state.view_state import (
    DetailViewState,
    FetchCancelled,
    FetchFailed,
    FetchSucceeded,
    ListViewState,
    RequestStatus,
)

ROWS = [WalletRanking("0xaaa", 1.0), WalletRanking("0xbbb", 2.0)]


def test_runner_success():
    async def fetch():
        return ROWS

    outcome = asyncio.run(RequestRunner("list").run(5, fetch))
    assert outcome == FetchSucceeded(5, ROWS)


def test_runner_converts_fetch_failure():
    async def fetch():
        raise FetchFailure("Request failed with status code 502", status=502)

    outcome = asyncio.run(RequestRunner("list").run(1, fetch))
    assert isinstance(outcome, FetchFailed)
    assert "502" in outcome.message


def test_runner_timeout_is_a_failure():
    async def fetch():
        await asyncio.sleep(5)

    outcome = asyncio.run(RequestRunner("detail", timeout=0.01).run(1, fetch))
    assert isinstance(outcome, FetchFailed)
    assert "timed out" in outcome.message


def test_runner_propagates_programming_errors():
    async def fetch():
        raise KeyError("bug")

    with pytest.raises(KeyError):
        asyncio.run(RequestRunner("list").run(1, fetch))


def test_new_request_cancels_previous():
    runner = RequestRunner("detail")

    async def slow():
        await asyncio.sleep(5)
        return "old"

    async def fast():
        return "new"

    async def scenario():
        first = asyncio.ensure_future(runner.run(1, slow))
        await asyncio.sleep(0)
        second = await runner.run(2, fast)
        return await first, second

    first, second = asyncio.run(scenario())
    assert first == FetchCancelled(1)
    assert second == FetchSucceeded(2, "new")


def test_cancel_on_teardown():
    runner = RequestRunner("detail")

    async def slow():
        await asyncio.sleep(5)

    async def scenario():
        pending = asyncio.ensure_future(runner.run(1, slow))
        await asyncio.sleep(0)
        runner.cancel()
        return await pending

    assert asyncio.run(scenario()) == FetchCancelled(1)


def test_request_ids_increase():
    runner = RequestRunner("list")
    assert runner.next_request_id() < runner.next_request_id()


def test_load_list_view_success():
    async def fetch():
        return ROWS

    state = asyncio.run(load_list_view(ListViewState(), RequestRunner("list"), fetch))
    assert state.status is RequestStatus.SUCCESS
    assert state.rankings == tuple(ROWS)
    assert state.current_page == 1


def test_load_list_view_failure_is_visible():
    async def fetch():
        raise FetchFailure("Cannot connect to host")

    state = asyncio.run(load_list_view(ListViewState(), RequestRunner("list"), fetch))
    assert state.status is RequestStatus.FAILURE
    assert state.error == "Cannot connect to host"


def test_load_detail_view_success():
    series = [MonthlyAggregate("2024-01", 1.0, 2.0, 3)]

    async def fetch():
        return series

    state = asyncio.run(
        load_detail_view(DetailViewState(wallet_address="0xabc"), RequestRunner("detail"), fetch)
    )
    assert state.series == tuple(series)


def test_load_detail_view_join_error_leaves_empty_state():
    async def fetch():
        raise MissingJoinKeyError("2024-02")

    state = asyncio.run(
        load_detail_view(DetailViewState(wallet_address="0xabc"), RequestRunner("detail"), fetch)
    )
    assert state.status is RequestStatus.FAILURE
    assert state.series == ()
    assert not state.loading


def test_load_detail_view_non_numeric_month_leaves_empty_state():
    summary = {
        "totalBuyAmounts": {"month": {"2024-01": None}},
        "totalSellAmounts": {"month": {"2024-01": 5}},
    }

    async def fetch():
        return aggregate_summary(summary)

    state = asyncio.run(
        load_detail_view(DetailViewState(wallet_address="0xabc"), RequestRunner("detail"), fetch)
    )
    assert state.status is RequestStatus.FAILURE
    assert state.series == ()
    assert "2024-01" in state.error
