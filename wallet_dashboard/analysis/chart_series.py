"""Turn a monthly series into chart-ready arrays and a dual-axis Plotly figure."""

import math
from typing import List, Sequence, Tuple

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ..formatting import format_number
from ..models.series import ChartInput, MonthlyAggregate
from ..config.settings import (
    BUY_COLOR,
    SELL_COLOR,
    TRANSACTIONS_COLOR,
    TRANSACTIONS_FILL,
)

_NICE_STEPS = (1, 2, 2.5, 5, 10)


def build_chart_input(series: Sequence[MonthlyAggregate]) -> ChartInput:
    """Split the series into labels and three aligned datasets."""
    return ChartInput(
        labels=[m.month for m in series],
        buy=[m.buy_volume for m in series],
        sell=[m.sell_volume for m in series],
        transactions=[m.total_transactions for m in series],
    )


def chart_frame(chart_input: ChartInput) -> pd.DataFrame:
    """Tabular view of the chart input for display and CSV export."""
    return pd.DataFrame(
        {
            "Month": chart_input.labels,
            "Buy Volume": chart_input.buy,
            "Sell Volume": chart_input.sell,
            "Total Transactions": chart_input.transactions,
        }
    )


def _nice_step(raw_step: float) -> float:
    magnitude = 10 ** math.floor(math.log10(raw_step))
    for multiple in _NICE_STEPS:
        step = multiple * magnitude
        if step >= raw_step:
            return step
    return 10 * magnitude


def axis_ticks(values: Sequence[float], count: int = 5) -> Tuple[List[float], List[str]]:
    """
    Evenly spaced tick values covering ``values`` (and zero), with labels
    abbreviated by format_number.
    """
    low = min([0.0, *values])
    high = max([0.0, *values])
    if high == low:
        high = low + 1

    step = _nice_step((high - low) / max(count - 1, 1))
    start = math.floor(low / step) * step
    stop = math.ceil(high / step) * step

    ticks = []
    n = int(round((stop - start) / step))
    for i in range(n + 1):
        tick = round(start + i * step, 10)
        ticks.append(int(tick) if float(tick).is_integer() else tick)
    return ticks, [format_number(t) for t in ticks]


def build_combo_figure(chart_input: ChartInput, title: str = "") -> go.Figure:
    """
    Buy/sell bars on the left axis and the transaction line on the right.

    Tick labels on both axes go through format_number at draw time; the
    chart input itself stays raw.
    """
    fig = make_subplots(specs=[[{"secondary_y": True}]])

    # Bars first so the line is drawn on top
    fig.add_trace(
        go.Bar(
            x=chart_input.labels,
            y=chart_input.buy,
            name="Buy Volume",
            marker_color=BUY_COLOR,
            width=0.25,
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Bar(
            x=chart_input.labels,
            y=chart_input.sell,
            name="Sell Volume",
            marker_color=SELL_COLOR,
            width=0.25,
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(
            x=chart_input.labels,
            y=chart_input.transactions,
            mode="lines+markers",
            name="Total Transactions",
            line=dict(color=TRANSACTIONS_COLOR, width=2),
            marker=dict(size=6),
            fill="tozeroy",
            fillcolor=TRANSACTIONS_FILL,
        ),
        secondary_y=True,
    )

    left_vals, left_text = axis_ticks(list(chart_input.buy) + list(chart_input.sell))
    right_vals, right_text = axis_ticks(chart_input.transactions)

    fig.update_layout(
        title=title,
        template="plotly_dark",
        barmode="group",
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        height=400,
        margin=dict(l=20, r=20, t=40, b=20),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    fig.update_xaxes(type="category")
    fig.update_yaxes(
        tickmode="array",
        tickvals=left_vals,
        ticktext=left_text,
        range=[left_vals[0], left_vals[-1]],
        secondary_y=False,
    )
    fig.update_yaxes(
        tickmode="array",
        tickvals=right_vals,
        ticktext=right_text,
        range=[right_vals[0], right_vals[-1]],
        showgrid=False,
        secondary_y=True,
    )
    return fig
