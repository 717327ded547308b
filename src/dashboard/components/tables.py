"""Tabular views of aggregate responses for display."""

import pandas as pd

from src.data.constants import PRICE_FEED_DECIMALS, TOKEN_DECIMALS
from src.staking.models import AggregateView


def to_units(raw: int, decimals: int = TOKEN_DECIMALS) -> float:
    """Convert a fixed-point integer amount to a float for display."""
    return raw / 10**decimals


def snapshots_frame(view: AggregateView) -> pd.DataFrame:
    """One row per staked asset with display-scaled values.

    Columns: symbol, kind, total_supply, total_redeemable, reward_price,
    staked_price, emission_per_day, apy_pct, cooldown_days,
    unstake_window_days, distribution_active.
    """
    rows = []
    for snap in view.snapshots:
        rows.append(
            {
                "symbol": snap.symbol,
                "kind": snap.kind.value,
                "total_supply": to_units(snap.total_supply),
                "total_redeemable": to_units(snap.total_redeemable_value),
                "reward_price": to_units(
                    snap.reward_asset_price_in_reference_currency, PRICE_FEED_DECIMALS
                ),
                "staked_price": to_units(
                    snap.staked_asset_price_in_reference_currency, PRICE_FEED_DECIMALS
                ),
                "emission_per_day": to_units(snap.distribution_per_second * 86400),
                "apy_pct": snap.apy_percent,
                "cooldown_days": snap.cooldown_seconds / 86400,
                "unstake_window_days": snap.unstake_window_seconds / 86400,
                "distribution_active": snap.is_distribution_active,
            }
        )
    return pd.DataFrame(rows)


def positions_frame(view: AggregateView) -> pd.DataFrame:
    """One row per staked asset the view carries a user position for."""
    rows = []
    for asset_view in view.assets:
        pos = asset_view.position
        if pos is None:
            continue
        rows.append(
            {
                "symbol": asset_view.snapshot.symbol,
                "staked": to_units(pos.staked_balance),
                "redeemable": to_units(pos.redeemable_value),
                "claimable_rewards": to_units(pos.claimable_rewards),
                "underlying": to_units(pos.underlying_balance),
                "cooldown_started_at": (
                    pd.to_datetime(pos.cooldown_started_at, unit="s", utc=True)
                    if pos.has_active_cooldown
                    else pd.NaT
                ),
                "cooldown_amount": to_units(pos.cooldown_amount),
            }
        )
    return pd.DataFrame(rows)
