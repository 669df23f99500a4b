"""Error taxonomy for the wallet dashboard."""

from typing import Optional


class DashboardError(Exception):
    """Base class for dashboard errors."""


class FetchFailure(DashboardError):
    """Network error, timeout or non-2xx response from the data provider."""

    def __init__(self, message: str, url: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class MissingJoinKeyError(DashboardError):
    """A month present in the buy map has no entry in the sell map."""

    def __init__(self, month: str):
        super().__init__(f"Month {month!r} has a buy total but no sell total")
        self.month = month


class MalformedMonthValueError(DashboardError):
    """A month total or count that is not a number."""

    def __init__(self, month: str, value):
        super().__init__(f"Month {month!r} has a non-numeric value: {value!r}")
        self.month = month
        self.value = value
