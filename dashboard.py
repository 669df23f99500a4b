"""Streamlit dashboard for wallets ranked by net profit."""

import asyncio
import logging
import sys
from pathlib import Path

import streamlit as st
import pandas as pd

sys.path.insert(0, str(Path(__file__).parent))

from wallet_dashboard.analysis.chart_series import build_combo_figure, chart_frame
from wallet_dashboard.formatting import (
    fetch_error_html,
    format_number,
    format_profit,
    shorten_address,
)
from wallet_dashboard.state.requests import RequestRunner, load_detail_view, load_list_view
from wallet_dashboard.state.view_state import (
    DetailViewState,
    GoToPage,
    ListViewState,
    NextPage,
    PreviousPage,
    RequestStatus,
    SortClicked,
    ViewClosed,
    can_go_next,
    can_go_previous,
    chart_input,
    page_numbers,
    reduce_detail_view,
    reduce_list_view,
    sort_indicator,
    visible_rows,
    wallet_route,
)
from wallet_dashboard.config.settings import LOG_FORMAT, LOG_LEVEL, NETWORK

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Page Config
st.set_page_config(
    page_title="Wallet Profit Dashboard",
    layout="wide",
    initial_sidebar_state="collapsed",
    page_icon="💰"
)

# --- CSS STYLING ---
st.markdown("""
<style>
    .stApp {
        font-family: 'IBM Plex Mono', 'Courier New', monospace;
    }

    .block-container {
        padding-top: 2rem;
        padding-bottom: 2rem;
    }

    /* Table rows */
    .wallet-cell {
        text-align: center;
        padding: 8px;
    }

    .stButton button {
        border-radius: 4px;
        font-size: 0.8rem;
    }

    .terminal-header {
        border-bottom: 2px solid #00C076;
        padding-bottom: 10px;
        margin-bottom: 20px;
        color: #00C076;
        font-weight: bold;
        text-transform: uppercase;
        letter-spacing: 0.1em;
        text-align: center;
    }

    .fetch-error {
        color: #FF4F4F;
        font-weight: bold;
        text-align: center;
    }
</style>
""", unsafe_allow_html=True)


def get_runner(key: str) -> RequestRunner:
    """Request runner kept across reruns, one per view."""
    if key not in st.session_state:
        st.session_state[key] = RequestRunner(name=key.replace("_runner", ""))
    return st.session_state[key]


def display_address(address: str) -> str:
    """Shorten the address when the compact (narrow screen) layout is on."""
    if st.session_state.get("compact_addresses", True):
        return shorten_address(address)
    return address


def dispatch_list(action):
    st.session_state["list_view"] = reduce_list_view(st.session_state["list_view"], action)
    st.rerun()


def open_wallet(wallet_address: str):
    """Navigate to the detail view of one wallet."""
    logger.debug(f"Navigating to {wallet_route(wallet_address)}")
    st.session_state["list_view"] = reduce_list_view(st.session_state["list_view"], ViewClosed())
    st.query_params["wallet"] = wallet_address
    st.rerun()


def close_wallet():
    """Tear down the detail view and go back to the list."""
    get_runner("detail_runner").cancel()
    if "detail_view" in st.session_state:
        st.session_state["detail_view"] = reduce_detail_view(
            st.session_state["detail_view"], ViewClosed()
        )
    if "wallet" in st.query_params:
        del st.query_params["wallet"]
    st.rerun()


def render_sidebar():
    """Render sidebar with display and data controls."""
    st.sidebar.markdown("### ⚙️ DISPLAY")
    st.sidebar.toggle(
        "Compact addresses",
        value=True,
        key="compact_addresses",
        help="Show addresses as 0x12...abcd (narrow screens)",
    )
    st.sidebar.markdown("---")

    st.sidebar.markdown("### 📡 DATA")
    st.sidebar.caption(f"Network: **{NETWORK}**")
    if st.sidebar.button("REFRESH", use_container_width=True):
        st.session_state["list_view"] = ListViewState()
        st.session_state.pop("detail_view", None)
        st.rerun()

    state = st.session_state.get("list_view")
    if state is not None and state.status is RequestStatus.SUCCESS:
        st.sidebar.metric("Wallets", len(state.rankings))


def render_pagination(state: ListViewState):
    """Render the < 1 2 3 > page strip."""
    numbers = page_numbers(state)
    cols = st.columns([1] * (len(numbers) + 2))

    with cols[0]:
        if st.button("<", key="page_prev", disabled=not can_go_previous(state), use_container_width=True):
            dispatch_list(PreviousPage())

    for col, number in zip(cols[1:-1], numbers):
        with col:
            if st.button(
                str(number),
                key=f"page_{number}",
                use_container_width=True,
                type="primary" if number == state.current_page else "secondary",
            ):
                dispatch_list(GoToPage(number))

    with cols[-1]:
        if st.button(">", key="page_next", disabled=not can_go_next(state), use_container_width=True):
            dispatch_list(NextPage())


def render_home_page():
    """List view: ranking table, sort header and pagination."""
    if "list_view" not in st.session_state:
        st.session_state["list_view"] = ListViewState()

    state = st.session_state["list_view"]
    if state.status is RequestStatus.IDLE:
        with st.spinner("Loading wallets..."):
            state = asyncio.run(load_list_view(state, get_runner("list_runner")))
        st.session_state["list_view"] = state

    st.markdown("<div class='terminal-header'>All users wallets</div>", unsafe_allow_html=True)

    if state.error:
        st.markdown(
            fetch_error_html(state.error),
            unsafe_allow_html=True,
        )
        return

    if not state.rankings:
        st.info("No wallets returned.")
        return

    # Header row
    h_profit, h_address = st.columns([1, 3])
    with h_profit:
        if st.button(f"Net Profit {sort_indicator(state)}", key="sort_profit", use_container_width=True):
            dispatch_list(SortClicked())
    h_address.markdown("<div class='wallet-cell'><b>Wallet Address</b></div>", unsafe_allow_html=True)

    # Data rows
    for idx, row in enumerate(visible_rows(state)):
        c_profit, c_address = st.columns([1, 3])
        with c_profit:
            st.markdown(
                f"<div class='wallet-cell'>{format_profit(row.net_profit)}</div>",
                unsafe_allow_html=True,
            )
        with c_address:
            if st.button(
                display_address(row.wallet_address),
                key=f"wallet_{state.current_page}_{idx}",
                use_container_width=True,
            ):
                open_wallet(row.wallet_address)

    render_pagination(state)

    df = pd.DataFrame([r.to_dict() for r in state.rankings])
    st.download_button(
        "📥 Download CSV",
        df.to_csv(index=False),
        "wallet_rankings.csv",
        "text/csv",
    )


def render_wallet_page(wallet_address: str):
    """Detail view: monthly buy/sell/transactions chart for one wallet."""
    state = st.session_state.get("detail_view")
    runner = get_runner("detail_runner")

    if state is None or state.wallet_address != wallet_address:
        runner.cancel()
        state = DetailViewState(wallet_address=wallet_address)

    if state.status is RequestStatus.IDLE:
        with st.spinner("Loading wallet summary..."):
            state = asyncio.run(load_detail_view(state, runner))
    st.session_state["detail_view"] = state

    if st.button("← Back"):
        close_wallet()

    st.markdown("<div class='terminal-header'>Wallet Details</div>", unsafe_allow_html=True)
    st.caption(display_address(wallet_address))

    # Fetch failures end up here as an empty series, without a message
    data = chart_input(state)
    if data.is_empty:
        st.caption("No monthly activity to show.")
        return

    m1, m2, m3 = st.columns(3)
    m1.metric("BUY VOLUME", format_number(sum(data.buy)))
    m2.metric("SELL VOLUME", format_number(sum(data.sell)))
    m3.metric("TRANSACTIONS", format_number(sum(data.transactions)))

    st.plotly_chart(build_combo_figure(data), use_container_width=True)

    df = chart_frame(data)
    st.dataframe(df, use_container_width=True, hide_index=True)
    st.download_button(
        "📥 Download CSV",
        df.to_csv(index=False),
        f"wallet_{wallet_address}_monthly.csv",
        "text/csv",
    )


def main():
    render_sidebar()

    wallet_address = st.query_params.get("wallet")
    if wallet_address:
        render_wallet_page(wallet_address)
    else:
        render_home_page()


if __name__ == "__main__":
    main()
