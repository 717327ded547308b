"""Immutable views of staked assets and user positions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AssetKind(str, Enum):
    """How a staked asset is backed, which decides its pricing rule."""

    SINGLE_ASSET = "single_asset"  # Staked unit == reward unit (e.g. stkAAVE)
    POOL_BACKED = "pool_backed"  # Staked unit is an LP share with its own feed


@dataclass(frozen=True)
class StakedAssetSnapshot:
    """Protocol-level view of one staked asset.

    All amounts are integers in the asset's native precision; prices are
    raw feed answers in the reference currency.
    """

    symbol: str
    kind: AssetKind
    total_supply: int
    total_redeemable_value: int
    cooldown_seconds: int
    unstake_window_seconds: int
    reward_asset_price_in_reference_currency: int
    distribution_end_timestamp: int
    distribution_per_second: int  # 0 once the distribution has ended
    staked_asset_price_in_reference_currency: int
    annualized_yield_rate: int  # APY_PRECISION fixed point, 10_000 == 100%

    @property
    def apy_percent(self) -> float:
        """Annualized yield as a percentage (e.g. 31.53)."""
        return self.annualized_yield_rate / 100

    @property
    def is_distribution_active(self) -> bool:
        return self.distribution_per_second > 0


@dataclass(frozen=True)
class UserPosition:
    """A user's position in one staked asset."""

    user: str
    staked_balance: int
    claimable_rewards: int
    underlying_balance: int
    redeemable_value: int
    cooldown_started_at: int
    cooldown_amount: int

    @property
    def has_active_cooldown(self) -> bool:
        return self.cooldown_started_at != 0


@dataclass(frozen=True)
class StakedAssetView:
    """Snapshot of one staked asset, with the user's position when requested."""

    snapshot: StakedAssetSnapshot
    position: UserPosition | None = None


@dataclass(frozen=True)
class AggregateView:
    """Views of several staked assets plus the shared reference price."""

    assets: tuple[StakedAssetView, ...]
    reference_price: int

    def get(self, symbol: str) -> StakedAssetView:
        for view in self.assets:
            if view.snapshot.symbol == symbol:
                return view
        raise KeyError(symbol)

    @property
    def snapshots(self) -> tuple[StakedAssetSnapshot, ...]:
        return tuple(view.snapshot for view in self.assets)
