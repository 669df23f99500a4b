"""Monthly aggregate and chart input dataclasses for the detail view."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class MonthlyAggregate:
    """Buy/sell volume and transaction count for one calendar month."""

    month: str  # Month key as sent by the API, e.g. "2024-01"
    buy_volume: float
    sell_volume: float
    total_transactions: int = 0  # 0 when the month has no count entry

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "month": self.month,
            "buy_volume": self.buy_volume,
            "sell_volume": self.sell_volume,
            "total_transactions": self.total_transactions,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MonthlyAggregate":
        """Create from dictionary."""
        return cls(
            month=data["month"],
            buy_volume=data["buy_volume"],
            sell_volume=data["sell_volume"],
            total_transactions=data.get("total_transactions", 0),
        )


@dataclass(frozen=True)
class ChartInput:
    """Positionally aligned arrays for the dual-axis bar+line chart.

    Index i of every list refers to the same month. Buy and sell share the
    left axis, transactions use the right axis.
    """

    labels: List[str] = field(default_factory=list)
    buy: List[float] = field(default_factory=list)
    sell: List[float] = field(default_factory=list)
    transactions: List[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.labels

    def to_dict(self) -> dict:
        return {
            "labels": list(self.labels),
            "buy": list(self.buy),
            "sell": list(self.sell),
            "transactions": list(self.transactions),
        }
