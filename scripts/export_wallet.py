#!/usr/bin/env python
"""
Print a page of the wallet ranking, or export one wallet's monthly series.

Usage:
    python scripts/export_wallet.py rankings [--page 1] [--sort desc]
    python scripts/export_wallet.py summary 0xabc... [--output monthly.csv]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from wallet_dashboard.analysis.chart_series import build_chart_input, chart_frame
from wallet_dashboard.analysis.pagination import clamp_page, page_count, paginate
from wallet_dashboard.analysis.sorting import sort_rankings
from wallet_dashboard.errors import DashboardError
from wallet_dashboard.fetchers.wallet_fetcher import WalletDataFetcher
from wallet_dashboard.formatting import format_profit
from wallet_dashboard.models.ranking import SortOrder
from wallet_dashboard.config.settings import ITEMS_PER_PAGE, LOG_FORMAT

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


async def print_rankings(page: int, per_page: int, sort: str = None):
    async with WalletDataFetcher() as fetcher:
        rankings = await fetcher.fetch_rankings()

    if sort:
        rankings = sort_rankings(rankings, SortOrder(sort))

    pages = page_count(len(rankings), per_page)
    page = clamp_page(page, pages)
    print(f"Page {page}/{pages}")
    for row in paginate(rankings, per_page, page):
        print(f"{format_profit(row.net_profit):>16}  {row.wallet_address}")


async def export_summary(wallet_address: str, output: str = None):
    async with WalletDataFetcher() as fetcher:
        series = await fetcher.fetch_monthly_series(wallet_address)

    df = chart_frame(build_chart_input(series))
    if output:
        df.to_csv(output, index=False)
        logger.info(f"Wrote {len(df)} months to {output}")
    else:
        print(df.to_string(index=False))


def main():
    parser = argparse.ArgumentParser(description="Wallet ranking and summary export")
    sub = parser.add_subparsers(dest="command", required=True)

    p_rank = sub.add_parser("rankings", help="Print one page of the ranking")
    p_rank.add_argument("--page", type=int, default=1)
    p_rank.add_argument("--per-page", type=int, default=ITEMS_PER_PAGE)
    p_rank.add_argument("--sort", choices=[o.value for o in SortOrder], default=None,
                        help="Re-sort by net profit (default: provider order)")

    p_sum = sub.add_parser("summary", help="Monthly buy/sell/transactions of a wallet")
    p_sum.add_argument("wallet", type=str)
    p_sum.add_argument("--output", type=str, default=None, help="CSV path (default: print)")

    args = parser.parse_args()

    try:
        if args.command == "rankings":
            asyncio.run(print_rankings(args.page, args.per_page, args.sort))
        else:
            asyncio.run(export_summary(args.wallet, args.output))
    except DashboardError as e:
        logger.error(f"Export failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
