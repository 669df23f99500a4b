"""Net profit sorting for the ranking collection."""

import logging
from typing import List, Sequence, Tuple

from ..models.ranking import SortOrder, WalletRanking

logger = logging.getLogger(__name__)


def sort_rankings(
    rankings: Sequence[WalletRanking],
    order: SortOrder,
) -> List[WalletRanking]:
    """Return a new list ordered by net profit in the given direction."""
    return sorted(
        rankings,
        key=lambda r: r.net_profit,
        reverse=order is SortOrder.DESCENDING,
    )


def toggle_sort(
    rankings: Sequence[WalletRanking],
    order: SortOrder,
) -> Tuple[List[WalletRanking], SortOrder]:
    """
    Sort by ``order`` and hand back the direction for the next click.

    Each header click sorts with the stored direction and then flips it,
    so repeated clicks alternate ascending/descending.
    """
    sorted_rankings = sort_rankings(rankings, order)
    logger.debug(f"Sorted {len(sorted_rankings)} rankings {order.value}")
    return sorted_rankings, order.toggled()


def sort_indicator(order: SortOrder) -> str:
    """Arrow shown next to the Net Profit header."""
    return "▲" if order is SortOrder.ASCENDING else "▼"
