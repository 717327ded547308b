"""Staked Assets page: per-asset KPIs, snapshot table and charts."""

import streamlit as st

from src.dashboard.components.charts import apy_bar_chart, tvl_chart
from src.dashboard.components.metrics_cards import snapshot_kpis
from src.dashboard.components.tables import snapshots_frame, to_units
from src.data.constants import REFERENCE_FEED_DECIMALS
from src.staking.models import AggregateView


def render_overview(view: AggregateView) -> None:
    """Render the staked assets overview page."""
    st.header("Staked Assets")

    for snapshot in view.snapshots:
        st.subheader(snapshot.symbol)
        snapshot_kpis(snapshot)
        st.divider()

    df = snapshots_frame(view)
    st.dataframe(df, use_container_width=True, hide_index=True)

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(apy_bar_chart(df), use_container_width=True)
    with col2:
        st.plotly_chart(tvl_chart(df), use_container_width=True)

    eth_usd = to_units(view.reference_price, REFERENCE_FEED_DECIMALS)
    st.info(f"ETH/USD: **{eth_usd:,.2f}**")
