"""Staked Assets Dashboard: Main Streamlit entry point."""

import logging
import os
from pathlib import Path

import streamlit as st

# Load .env file if present (for ETH_RPC_URL, feed overrides, etc.)
_env_path = Path(__file__).resolve().parents[2] / ".env"
if _env_path.exists():
    for line in _env_path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, _, value = line.partition("=")
            os.environ.setdefault(key.strip(), value.strip())

# Bridge Streamlit Cloud secrets into os.environ so config loading and the
# provider factory can read them via os.environ.get().
try:
    for key in st.secrets:
        if isinstance(st.secrets[key], str):
            os.environ.setdefault(key, st.secrets[key])
except Exception:
    pass  # No secrets configured

from src.dashboard.components.sidebar import render_sidebar
from src.dashboard.tabs.overview import render_overview
from src.dashboard.tabs.positions import render_positions
from src.data.errors import AggregationError
from src.data.provider_factory import create_sources
from src.staking.aggregation import AggregationService

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def main() -> None:
    st.set_page_config(
        page_title="Staked Assets Dashboard",
        page_icon="📊",
        layout="wide",
    )

    st.title("Staked Assets Dashboard")
    st.caption("Safety module staking: supply, prices and APY")

    use_onchain = st.sidebar.checkbox("Use On-Chain Data", value=False, key="use_onchain")
    sources = create_sources(use_onchain=use_onchain)

    if use_onchain and not sources.onchain:
        st.sidebar.error("Fell back to static data")
        if not os.environ.get("ETH_RPC_URL"):
            st.sidebar.caption("ETH_RPC_URL not found in environment")
    elif sources.onchain:
        st.sidebar.success("On-chain: sources ready")

    # Nothing is cached, so a rerun re-reads every source
    if st.sidebar.button("Refresh"):
        st.rerun()

    params = render_sidebar()
    service = AggregationService.from_sources(sources)
    st.sidebar.caption("Assets: " + ", ".join(service.config.symbols))

    try:
        if params.user:
            view = service.get_all_staked_assets_with_user(params.user)
        else:
            view = service.get_all_staked_assets()
    except AggregationError as exc:
        st.error(f"Could not load staked asset data: {exc}")
        return

    tab1, tab2 = st.tabs(["Staked Assets", "User Position"])

    with tab1:
        render_overview(view)

    with tab2:
        render_positions(view, params.user)


if __name__ == "__main__":
    main()
