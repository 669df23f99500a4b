"""Request lifecycle for view fetches: one in-flight task per view."""

import asyncio
import itertools
import logging
from typing import Any, Awaitable, Callable, Optional

from ..errors import DashboardError
from ..fetchers.wallet_fetcher import WalletDataFetcher
from ..config.settings import REQUEST_TIMEOUT_SECONDS
from .view_state import (
    DetailViewState,
    FetchCancelled,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    ListViewState,
    reduce_detail_view,
    reduce_list_view,
)

logger = logging.getLogger(__name__)

FetchFn = Callable[[], Awaitable[Any]]


class RequestRunner:
    """
    Runs the fetch backing a view and turns its outcome into an action.

    Starting a new request cancels the one still in flight, and cancel()
    is called when the view is torn down. Fetch-level errors never escape:
    they come back as FetchFailed.
    """

    def __init__(self, name: str, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self.name = name
        self.timeout = timeout
        self._ids = itertools.count(1)
        self._task: Optional[asyncio.Task] = None

    def next_request_id(self) -> int:
        return next(self._ids)

    def cancel(self) -> None:
        """Cancel the in-flight fetch, if any."""
        if self._task is not None and not self._task.done():
            logger.debug(f"Cancelling in-flight {self.name} request")
            self._task.cancel()
        self._task = None

    async def run(self, request_id: int, fetch: FetchFn):
        """Await ``fetch()`` and return FetchSucceeded/FetchFailed/FetchCancelled."""
        self.cancel()
        task = asyncio.ensure_future(fetch())
        self._task = task

        try:
            done, _ = await asyncio.wait({task}, timeout=self.timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            if self._task is task:
                self._task = None

        if not done:
            task.cancel()
            message = f"Request timed out after {self.timeout}s"
            logger.error(f"Error fetching {self.name} data: {message}")
            return FetchFailed(request_id, message)

        if task.cancelled():
            logger.debug(f"{self.name} request {request_id} was cancelled")
            return FetchCancelled(request_id)

        error = task.exception()
        if error is None:
            return FetchSucceeded(request_id, task.result())
        if isinstance(error, DashboardError):
            logger.error(f"Error fetching {self.name} data: {error}")
            return FetchFailed(request_id, str(error))
        raise error


async def fetch_rankings(fetcher_factory=WalletDataFetcher):
    async with fetcher_factory() as fetcher:
        return await fetcher.fetch_rankings()


async def fetch_monthly_series(wallet_address: str, fetcher_factory=WalletDataFetcher):
    async with fetcher_factory() as fetcher:
        return await fetcher.fetch_monthly_series(wallet_address)


async def load_list_view(
    state: ListViewState,
    runner: RequestRunner,
    fetch: Optional[FetchFn] = None,
) -> ListViewState:
    """Run the list fetch through the reducer: started, then its outcome."""
    fetch = fetch or fetch_rankings
    request_id = runner.next_request_id()
    state = reduce_list_view(state, FetchStarted(request_id))
    outcome = await runner.run(request_id, fetch)
    return reduce_list_view(state, outcome)


async def load_detail_view(
    state: DetailViewState,
    runner: RequestRunner,
    fetch: Optional[FetchFn] = None,
) -> DetailViewState:
    """Run the detail fetch for ``state.wallet_address`` through the reducer."""
    if fetch is None:
        wallet_address = state.wallet_address

        async def fetch():
            return await fetch_monthly_series(wallet_address)

    request_id = runner.next_request_id()
    state = reduce_detail_view(state, FetchStarted(request_id))
    outcome = await runner.run(request_id, fetch)
    return reduce_detail_view(state, outcome)
