"""Reusable Plotly chart components."""

import pandas as pd
import plotly.graph_objects as go


def apy_bar_chart(df: pd.DataFrame, title: str = "Staking APY") -> go.Figure:
    """Bar chart of APY per staked asset.

    Args:
        df: DataFrame with columns: symbol, apy_pct (see ``snapshots_frame``).
        title: Chart title.
    """
    fig = go.Figure()

    fig.add_trace(
        go.Bar(
            x=df["symbol"],
            y=df["apy_pct"],
            name="APY",
            marker_color="#22c55e",
            hovertemplate="%{x}<br>APY: %{y:.2f}%<extra></extra>",
        )
    )

    fig.update_layout(
        title=title,
        xaxis_title="Staked Asset",
        yaxis_title="APY (%)",
        template="plotly_dark",
        height=400,
    )
    return fig


def tvl_chart(df: pd.DataFrame, title: str = "Staked Value") -> go.Figure:
    """Staked value per asset in the reference currency.

    Args:
        df: DataFrame with columns: symbol, total_supply, staked_price.
        title: Chart title.
    """
    fig = go.Figure(
        go.Bar(
            x=df["symbol"],
            y=df["total_supply"] * df["staked_price"],
            marker_color="#3b82f6",
            hovertemplate="%{x}<br>Value: %{y:,.0f} ETH<extra></extra>",
        )
    )
    fig.update_layout(
        title=title,
        xaxis_title="Staked Asset",
        yaxis_title="Value (ETH)",
        template="plotly_dark",
        height=400,
    )
    return fig
