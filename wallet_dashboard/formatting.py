"""Display helpers for magnitudes, profits and wallet addresses."""

import html
import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Union

from .config.settings import ADDRESS_EDGE

Number = Union[int, float]

FETCH_ERROR_MESSAGE = "there is a problem with fetching data, please refresh the page"

# Checked top-down, first match wins
_MAGNITUDE_SUFFIXES = (
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)


def _plain_number(value: Number) -> str:
    """Render a number the way a chart tick shows raw values: no trailing '.0'."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def _one_decimal(value: float) -> str:
    """One decimal, exact halves of the binary value rounded away from zero."""
    if not math.isfinite(value):
        return str(value)
    rounded = Decimal(value).quantize(
        Decimal("0.1"), rounding=ROUND_HALF_UP, context=Context(prec=400)
    )
    return str(rounded)


def format_number(value: Number) -> str:
    """
    Abbreviate a magnitude with a K/M/B suffix and one decimal.

    Thresholds compare the signed value, so negative numbers always fall
    through to the raw string (-5000 renders as "-5000", not "-5.0K").
    This matches the existing chart ticks and is kept as is until it is
    decided whether losses should be abbreviated too.
    """
    for threshold, suffix in _MAGNITUDE_SUFFIXES:
        if value >= threshold:
            return f"{_one_decimal(value / threshold)}{suffix}"
    return _plain_number(value)


def format_profit(value: Number) -> str:
    """Net profit with two decimals, as shown in the ranking table."""
    return f"{value:.2f}"


def shorten_address(address: str, edge: int = ADDRESS_EDGE) -> str:
    """Collapse an address to ``prefix...suffix`` keeping ``edge`` chars per side."""
    if len(address) <= 2 * edge + 3:
        return address
    return f"{address[:edge]}...{address[len(address) - edge:]}"


def fetch_error_html(error: str) -> str:
    """Error banner of the list view; the provider's message is escaped."""
    return (
        f"<div class='fetch-error'>{FETCH_ERROR_MESSAGE}<br/>{html.escape(error)}</div>"
    )
