"""Join the per-month buy/sell/count maps of a wallet summary into one series."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd

from ..errors import MalformedMonthValueError, MissingJoinKeyError
from ..models.series import MonthlyAggregate

logger = logging.getLogger(__name__)

# Top-level keys of the wallet summary payload; each holds {"month": {...}}
BUY_KEY = "totalBuyAmounts"
SELL_KEY = "totalSellAmounts"
COUNT_KEY = "totalBuySellTimes"

MonthMap = Mapping[str, Any]


def _month_map(summary: Mapping[str, Any], key: str) -> Dict[str, Any]:
    section = summary.get(key) or {}
    return dict(section.get("month") or {})


def extract_monthly_maps(
    summary: Optional[Mapping[str, Any]],
) -> Tuple[Dict[str, Any], Dict[str, Any], Dict[str, Any]]:
    """
    Pull the buy, sell and transaction-count month maps out of a summary.

    A missing top-level key (or a missing "month" inside it) is an empty
    map, not an error.
    """
    summary = summary or {}
    return (
        _month_map(summary, BUY_KEY),
        _month_map(summary, SELL_KEY),
        _month_map(summary, COUNT_KEY),
    )


def parse_month(month: str) -> Optional[pd.Timestamp]:
    """Parse a month key to a naive UTC timestamp, or None if unparsable."""
    try:
        parsed = pd.to_datetime(month, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC").tz_localize(None)
    return parsed


def _number(month: str, value: Any, cast) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedMonthValueError(month, value) from e


def _join_month(month: str, buy_volume: Any, sell_volume: Any, count: Any) -> MonthlyAggregate:
    return MonthlyAggregate(
        month=month,
        buy_volume=_number(month, buy_volume, float),
        sell_volume=_number(month, sell_volume, float),
        total_transactions=_number(month, count or 0, int),
    )


def aggregate_monthly(
    buy: MonthMap,
    sell: MonthMap,
    count: MonthMap,
) -> List[MonthlyAggregate]:
    """
    Merge the three month maps into a chronologically ordered series.

    The buy map drives the join: months only present in ``sell`` or
    ``count`` are dropped. A buy month without a sell entry raises
    MissingJoinKeyError. A month without a count entry gets 0 transactions.
    A value that is not a number raises MalformedMonthValueError.

    Months that fail to parse are kept but sorted after every valid month;
    their relative order is not guaranteed.
    """
    rows: List[MonthlyAggregate] = []
    for month, buy_volume in buy.items():
        if month not in sell:
            raise MissingJoinKeyError(month)
        rows.append(_join_month(month, buy_volume, sell[month], count.get(month)))

    if not rows:
        return []

    dropped = [m for m in list(sell) + list(count) if m not in buy]
    if dropped:
        logger.debug(f"Ignoring {len(set(dropped))} months with no buy total")

    parsed = [parse_month(r.month) for r in rows]
    malformed = [r.month for r, p in zip(rows, parsed) if p is None]
    if malformed:
        logger.warning(f"Unparsable month keys sorted last: {malformed}")

    frame = pd.DataFrame({"parsed": parsed})
    order = frame.sort_values("parsed", na_position="last", kind="mergesort").index
    return [rows[i] for i in order]


def aggregate_summary(summary: Optional[Mapping[str, Any]]) -> List[MonthlyAggregate]:
    """Extract and aggregate a wallet summary payload in one step."""
    buy, sell, count = extract_monthly_maps(summary)
    return aggregate_monthly(buy, sell, count)
