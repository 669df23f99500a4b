#!/usr/bin/env python
"""
Live check of both data provider endpoints through the whole pipeline.

Fetches the ranking list, pages and sorts it, then aggregates the monthly
series of the top wallet and builds its chart input.

Usage:
    python scripts/check_api.py [--wallet 0xabc...]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from wallet_dashboard.analysis.chart_series import build_chart_input
from wallet_dashboard.analysis.pagination import page_count, paginate
from wallet_dashboard.analysis.sorting import sort_rankings
from wallet_dashboard.errors import DashboardError
from wallet_dashboard.fetchers.wallet_fetcher import WalletDataFetcher
from wallet_dashboard.formatting import format_number, format_profit, shorten_address
from wallet_dashboard.models.ranking import SortOrder
from wallet_dashboard.config.settings import ITEMS_PER_PAGE, LOG_FORMAT

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


async def check_rankings(fetcher: WalletDataFetcher):
    """Fetch and page the ranking list."""
    logger.info("=" * 50)
    logger.info("CHECK 1: Ranking list")
    logger.info("=" * 50)

    rankings = await fetcher.fetch_rankings()
    if not rankings:
        logger.error("FAILED: No wallets returned")
        return None

    pages = page_count(len(rankings), ITEMS_PER_PAGE)
    logger.info(f"SUCCESS: {len(rankings)} wallets over {pages} pages")

    for row in paginate(rankings, ITEMS_PER_PAGE, 1):
        logger.info(f"  {shorten_address(row.wallet_address)}  {format_profit(row.net_profit)}")

    top = sort_rankings(rankings, SortOrder.DESCENDING)[0]
    logger.info(f"  Top wallet: {top.wallet_address} ({format_profit(top.net_profit)})")
    return top.wallet_address


async def check_wallet_summary(fetcher: WalletDataFetcher, wallet_address: str):
    """Fetch and aggregate the monthly series of one wallet."""
    logger.info("")
    logger.info("=" * 50)
    logger.info("CHECK 2: Wallet summary")
    logger.info("=" * 50)

    series = await fetcher.fetch_monthly_series(wallet_address)
    chart = build_chart_input(series)
    logger.info(f"SUCCESS: {len(series)} months for {shorten_address(wallet_address)}")

    for label, buy, sell, tx in zip(chart.labels, chart.buy, chart.sell, chart.transactions):
        logger.info(
            f"  {label}: buy {format_number(buy)}  sell {format_number(sell)}  tx {tx}"
        )


async def main(wallet_address: str = None):
    try:
        async with WalletDataFetcher() as fetcher:
            top_wallet = await check_rankings(fetcher)
            wallet_address = wallet_address or top_wallet
            if wallet_address:
                await check_wallet_summary(fetcher, wallet_address)
            logger.info(f"API calls made: {fetcher.get_stats()['api_calls']}")
    except DashboardError as e:
        logger.error(f"CHECK FAILED: {e}")
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Check the wallet data endpoints")
    parser.add_argument("--wallet", type=str, default=None, help="Wallet to summarise (default: top wallet)")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.wallet)))
