"""Sidebar controls."""

from dataclasses import dataclass

import streamlit as st


@dataclass
class SidebarParams:
    """User-controlled parameters from the sidebar."""

    user: str | None


def render_sidebar() -> SidebarParams:
    """Render sidebar controls and return selected parameters."""
    # The on-chain toggle is rendered in app.py, before sources are built.

    st.sidebar.header("User Position")

    user = st.sidebar.text_input(
        "Wallet address",
        value="",
        placeholder="0x...",
        help="Leave empty to show protocol-level data only.",
    ).strip()

    return SidebarParams(user=user or None)
