"""Fetcher for wallet rankings and monthly wallet summaries.

Two read-only endpoints are used:
- /valuable_wallets: ordered list of {walletAddress, netProfit} rows
- /walletsummary/<address>: nested month maps for buy, sell and tx counts

Every failure (connection error, timeout, non-2xx status, unexpected body)
is raised as FetchFailure. Callers decide how it is shown.
"""

import aiohttp
import asyncio
import logging
from typing import Any, Dict, List, Optional

from ..analysis.time_series import aggregate_summary
from ..errors import FetchFailure
from ..models.ranking import WalletRanking
from ..models.series import MonthlyAggregate
from ..config.settings import (
    API_BASE_URL,
    NETWORK,
    RANKINGS_LIMIT,
    RANKINGS_PAGE,
    RANKINGS_PATH,
    REQUEST_TIMEOUT_SECONDS,
    WALLET_SUMMARY_PATH,
)

logger = logging.getLogger(__name__)


def parse_rankings(body: Any) -> List[WalletRanking]:
    """Parse the list endpoint body, keeping the provider's order."""
    if not isinstance(body, list):
        raise FetchFailure(f"Expected a list of wallets, got {type(body).__name__}")
    try:
        return [WalletRanking.from_dict(row) for row in body]
    except (KeyError, TypeError, ValueError) as e:
        raise FetchFailure(f"Malformed wallet row: {e}") from e


class WalletDataFetcher:
    """Fetches rankings and wallet summaries from the on-chain data API."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        network: str = NETWORK,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.network = network
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None
        # Stats
        self._api_calls = 0

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        return self

    async def __aexit__(self, *args):
        if self.session:
            await self.session.close()

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with self.session.get(url, params=params) as response:
                self._api_calls += 1
                if response.status != 200:
                    raise FetchFailure(
                        f"Request failed with status code {response.status}",
                        url=url,
                        status=response.status,
                    )
                return await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise FetchFailure(f"Request timed out after {self.timeout}s", url=url) from e
        except aiohttp.ClientError as e:
            raise FetchFailure(str(e) or type(e).__name__, url=url) from e
        except ValueError as e:
            raise FetchFailure(f"Invalid JSON body: {e}", url=url) from e

    async def fetch_rankings(
        self,
        page: int = RANKINGS_PAGE,
        limit: int = RANKINGS_LIMIT,
    ) -> List[WalletRanking]:
        """Fetch one page of wallets ranked by net profit."""
        params = {"network": self.network, "page": page, "limit": limit}
        body = await self._get_json(RANKINGS_PATH, params)
        rankings = parse_rankings(body)
        logger.info(f"Fetched {len(rankings)} wallet rankings")
        return rankings

    async def fetch_wallet_summary(self, wallet_address: str) -> Dict[str, Any]:
        """
        Fetch the raw summary payload for one wallet.

        The address is inserted into the path as is; callers must encode it
        if it can contain reserved characters.
        """
        path = WALLET_SUMMARY_PATH.format(wallet_address=wallet_address)
        body = await self._get_json(path, {"network": self.network})
        if not isinstance(body, dict):
            raise FetchFailure(
                f"Expected a summary object, got {type(body).__name__}",
                url=f"{self.base_url}{path}",
            )
        return body

    async def fetch_monthly_series(self, wallet_address: str) -> List[MonthlyAggregate]:
        """Fetch a wallet summary and aggregate it into the monthly series."""
        summary = await self.fetch_wallet_summary(wallet_address)
        series = aggregate_summary(summary)
        logger.info(f"Aggregated {len(series)} months for {wallet_address[:10]}")
        return series

    def get_stats(self) -> Dict[str, int]:
        """Get stats about fetching."""
        return {"api_calls": self._api_calls}
