"""View state for the list and detail views, updated through reducers.

State values are frozen; every transition returns a new value built with
dataclasses.replace. Fetch results carry the id of the request that
produced them and are dropped when that id is no longer the view's current
request, so a re-entered view never applies a stale response.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, List, Optional, Tuple

from ..analysis.chart_series import build_chart_input
from ..analysis.pagination import (
    clamp_page,
    next_page,
    page_count,
    page_numbers as _page_numbers,
    paginate,
    previous_page,
)
from ..analysis.sorting import sort_indicator as _sort_indicator, toggle_sort
from ..models.ranking import SortOrder, WalletRanking
from ..models.series import ChartInput, MonthlyAggregate
from ..config.settings import ITEMS_PER_PAGE

logger = logging.getLogger(__name__)


class RequestStatus(Enum):
    """Lifecycle of the fetch backing a view."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


# --- Actions ---


@dataclass(frozen=True)
class FetchStarted:
    request_id: int


@dataclass(frozen=True)
class FetchSucceeded:
    request_id: int
    payload: Any


@dataclass(frozen=True)
class FetchFailed:
    request_id: int
    message: str


@dataclass(frozen=True)
class FetchCancelled:
    request_id: int


@dataclass(frozen=True)
class GoToPage:
    page: int


@dataclass(frozen=True)
class NextPage:
    pass


@dataclass(frozen=True)
class PreviousPage:
    pass


@dataclass(frozen=True)
class SortClicked:
    pass


@dataclass(frozen=True)
class ViewClosed:
    pass


_FETCH_RESULTS = (FetchSucceeded, FetchFailed, FetchCancelled)


def _is_stale(state, action) -> bool:
    if action.request_id != state.request_id:
        logger.debug(
            f"Dropping {type(action).__name__} for request {action.request_id} "
            f"(current: {state.request_id})"
        )
        return True
    return False


# --- List view ---


@dataclass(frozen=True)
class ListViewState:
    """Ranking collection plus paging, sorting and fetch status."""

    rankings: Tuple[WalletRanking, ...] = ()
    current_page: int = 1
    items_per_page: int = ITEMS_PER_PAGE
    sort_order: SortOrder = SortOrder.ASCENDING  # Direction of the NEXT sort click
    status: RequestStatus = RequestStatus.IDLE
    error: Optional[str] = None
    request_id: Optional[int] = None

    @property
    def loading(self) -> bool:
        return self.status is RequestStatus.PENDING

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "rankings": [r.to_dict() for r in self.rankings],
            "current_page": self.current_page,
            "items_per_page": self.items_per_page,
            "sort_order": self.sort_order.value,
            "status": self.status.value,
            "error": self.error,
            "request_id": self.request_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ListViewState":
        """Create from dictionary."""
        return cls(
            rankings=tuple(WalletRanking.from_dict(r) for r in data.get("rankings", [])),
            current_page=data.get("current_page", 1),
            items_per_page=data.get("items_per_page", ITEMS_PER_PAGE),
            sort_order=SortOrder(data.get("sort_order", SortOrder.ASCENDING.value)),
            status=RequestStatus(data.get("status", RequestStatus.IDLE.value)),
            error=data.get("error"),
            request_id=data.get("request_id"),
        )


def total_pages(state: ListViewState) -> int:
    return page_count(len(state.rankings), state.items_per_page)


def visible_rows(state: ListViewState) -> List[WalletRanking]:
    """Rows of the current page window."""
    return paginate(state.rankings, state.items_per_page, state.current_page)


def can_go_previous(state: ListViewState) -> bool:
    return state.current_page > 1


def can_go_next(state: ListViewState) -> bool:
    return state.current_page < total_pages(state)


def page_numbers(state: ListViewState) -> List[int]:
    return _page_numbers(len(state.rankings), state.items_per_page)


def sort_indicator(state: ListViewState) -> str:
    return _sort_indicator(state.sort_order)


def reduce_list_view(state: ListViewState, action: Any) -> ListViewState:
    """Apply one user or fetch action to the list view."""
    if isinstance(action, FetchStarted):
        return replace(
            state, status=RequestStatus.PENDING, error=None, request_id=action.request_id
        )

    if isinstance(action, _FETCH_RESULTS) and _is_stale(state, action):
        return state

    if isinstance(action, FetchSucceeded):
        return replace(
            state,
            rankings=tuple(action.payload),
            current_page=1,
            status=RequestStatus.SUCCESS,
            error=None,
        )

    if isinstance(action, FetchFailed):
        return replace(state, status=RequestStatus.FAILURE, error=action.message)

    if isinstance(action, FetchCancelled):
        return replace(state, status=RequestStatus.IDLE, request_id=None)

    if isinstance(action, GoToPage):
        return replace(state, current_page=clamp_page(action.page, total_pages(state)))

    if isinstance(action, NextPage):
        return replace(
            state, current_page=next_page(state.current_page, total_pages(state))
        )

    if isinstance(action, PreviousPage):
        return replace(state, current_page=previous_page(state.current_page))

    if isinstance(action, SortClicked):
        # Page index is kept; the same page number now shows other rows
        rankings, order = toggle_sort(state.rankings, state.sort_order)
        return replace(state, rankings=tuple(rankings), sort_order=order)

    if isinstance(action, ViewClosed):
        # Back to IDLE so the view fetches a fresh snapshot when it reopens
        return replace(state, status=RequestStatus.IDLE, request_id=None)

    raise ValueError(f"Unsupported list view action: {action!r}")


# --- Detail view ---


@dataclass(frozen=True)
class DetailViewState:
    """Monthly series of one wallet plus fetch status.

    A failed fetch leaves an empty series. The error is kept for logging
    and debugging, but the detail view does not display it.
    """

    wallet_address: str = ""
    series: Tuple[MonthlyAggregate, ...] = ()
    status: RequestStatus = RequestStatus.IDLE
    error: Optional[str] = None
    request_id: Optional[int] = None

    @property
    def loading(self) -> bool:
        return self.status is RequestStatus.PENDING

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "wallet_address": self.wallet_address,
            "series": [m.to_dict() for m in self.series],
            "status": self.status.value,
            "error": self.error,
            "request_id": self.request_id,
        }


def chart_input(state: DetailViewState) -> ChartInput:
    return build_chart_input(state.series)


def reduce_detail_view(state: DetailViewState, action: Any) -> DetailViewState:
    """Apply one fetch or navigation action to the detail view."""
    if isinstance(action, FetchStarted):
        return replace(
            state,
            series=(),
            status=RequestStatus.PENDING,
            error=None,
            request_id=action.request_id,
        )

    if isinstance(action, _FETCH_RESULTS) and _is_stale(state, action):
        return state

    if isinstance(action, FetchSucceeded):
        return replace(
            state, series=tuple(action.payload), status=RequestStatus.SUCCESS, error=None
        )

    if isinstance(action, FetchFailed):
        return replace(
            state, series=(), status=RequestStatus.FAILURE, error=action.message
        )

    if isinstance(action, FetchCancelled):
        return replace(state, status=RequestStatus.IDLE, request_id=None)

    if isinstance(action, ViewClosed):
        # Back to IDLE so the view fetches a fresh snapshot when it reopens
        return replace(state, status=RequestStatus.IDLE, request_id=None)

    raise ValueError(f"Unsupported detail view action: {action!r}")


def wallet_route(wallet_address: str) -> str:
    """Route of the detail view; the address is not URL-encoded."""
    return f"/wallet/{wallet_address}"
