"""User Position page."""

import streamlit as st

from src.dashboard.components.tables import positions_frame
from src.staking.models import AggregateView


def render_positions(view: AggregateView, user: str | None) -> None:
    st.header("User Position")

    if user is None:
        st.info("Enter a wallet address in the sidebar to load its positions.")
        return

    st.caption(user)
    df = positions_frame(view)
    st.dataframe(df, use_container_width=True, hide_index=True)

    for asset_view in view.assets:
        pos = asset_view.position
        if pos is not None and pos.has_active_cooldown:
            window_end = (
                pos.cooldown_started_at
                + asset_view.snapshot.cooldown_seconds
                + asset_view.snapshot.unstake_window_seconds
            )
            st.warning(
                f"{asset_view.snapshot.symbol}: cooldown active, unstake window "
                f"closes at epoch {window_end}"
            )
