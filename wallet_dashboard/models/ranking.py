"""Wallet ranking dataclass and sort order for the list view."""

from dataclasses import dataclass
from enum import Enum


class SortOrder(Enum):
    """Direction used for the next net profit sort."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    def toggled(self) -> "SortOrder":
        """Return the opposite direction."""
        if self is SortOrder.ASCENDING:
            return SortOrder.DESCENDING
        return SortOrder.ASCENDING


@dataclass(frozen=True)
class WalletRanking:
    """A wallet and its net profit, as returned by the list endpoint."""

    wallet_address: str  # walletAddress from API
    net_profit: float  # netProfit in USD

    def to_dict(self) -> dict:
        """Convert to the API's camelCase shape."""
        return {
            "walletAddress": self.wallet_address,
            "netProfit": self.net_profit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WalletRanking":
        """Create from an API row."""
        return cls(
            wallet_address=data["walletAddress"],
            net_profit=float(data["netProfit"]),
        )
