"""Reusable metric card components for the dashboard."""

import streamlit as st

from src.dashboard.components.tables import to_units
from src.data.constants import PRICE_FEED_DECIMALS
from src.staking.models import StakedAssetSnapshot


def kpi_row(metrics: list[tuple[str, str, str | None]]) -> None:
    """Display a row of KPI cards.

    Args:
        metrics: List of (label, value, delta) tuples.
    """
    cols = st.columns(len(metrics))
    for col, (label, value, delta) in zip(cols, metrics):
        with col:
            st.metric(label=label, value=value, delta=delta)


def snapshot_kpis(snapshot: StakedAssetSnapshot) -> None:
    """KPI row for one staked asset."""
    status = None if snapshot.is_distribution_active else "distribution ended"
    kpi_row(
        [
            ("APY", f"{snapshot.apy_percent:.2f}%", status),
            ("Total Staked", f"{to_units(snapshot.total_supply):,.0f}", None),
            (
                "Staked Price",
                f"{to_units(snapshot.staked_asset_price_in_reference_currency, PRICE_FEED_DECIMALS):.4f} ETH",
                None,
            ),
            ("Cooldown", f"{snapshot.cooldown_seconds / 86400:.0f} days", None),
        ]
    )
