"""Static sources with hardcoded, representative staked token parameters."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.data.constants import STK_AAVE, STK_BPT
from src.data.interfaces import PriceFeedSource, StakedAssetSource, UserState

# Feed identifiers used in static mode (opaque labels instead of addresses)
AAVE_ETH_FEED = "AAVE/ETH"
ABPT_ETH_FEED = "ABPT/ETH"
ETH_USD_FEED = "ETH/USD"

WAD = 10**18


@dataclass(frozen=True)
class StaticStakedAsset:
    """Snapshot of a staked token contract's storage."""

    total_supply: int
    cooldown_seconds: int
    unstake_window_seconds: int
    distribution_end_timestamp: int
    emission_per_second: int
    # previewRedeem(x) == x * redeem_numerator // redeem_denominator
    redeem_numerator: int = 1
    redeem_denominator: int = 1
    users: dict[str, UserState] = field(default_factory=dict)


# --- Representative mainnet-like values ---

_STAKED_ASSETS: dict[str, StaticStakedAsset] = {
    STK_AAVE: StaticStakedAsset(
        total_supply=3_000_000 * WAD,
        cooldown_seconds=20 * 86400,
        unstake_window_seconds=2 * 86400,
        distribution_end_timestamp=4_102_444_800,  # 2100-01-01
        emission_per_second=385_802_469_135_802_469,  # ~33.3k AAVE / day
    ),
    STK_BPT: StaticStakedAsset(
        total_supply=1_000_000 * WAD,
        cooldown_seconds=20 * 86400,
        unstake_window_seconds=2 * 86400,
        distribution_end_timestamp=4_102_444_800,
        emission_per_second=115_740_740_740_740_740,  # 10k AAVE / day
    ),
}

# Prices as raw feed answers (18 decimals for /ETH, 8 for /USD)
_FEED_PRICES: dict[str, int] = {
    AAVE_ETH_FEED: 45_000_000_000_000_000,  # 0.045 ETH
    ABPT_ETH_FEED: 52_000_000_000_000_000,  # 0.052 ETH
    ETH_USD_FEED: 2_500_00000000,  # 2500 USD
}


class StaticPriceFeedSource(PriceFeedSource):
    """Price feed returning fixed answers."""

    def __init__(self, prices: dict[str, int] | None = None) -> None:
        self._prices = dict(_FEED_PRICES if prices is None else prices)

    def latest_price(self, feed_id: str) -> int:
        return self._prices[feed_id]


class StaticStakedAssetSource(StakedAssetSource):
    """Staked token source backed by a :class:`StaticStakedAsset`."""

    def __init__(self, asset: StaticStakedAsset) -> None:
        self._asset = asset

    @classmethod
    def for_symbol(cls, symbol: str) -> StaticStakedAssetSource:
        return cls(_STAKED_ASSETS[symbol])

    def _user(self, user: str) -> UserState | None:
        return self._asset.users.get(user.lower())

    def total_supply(self) -> int:
        return self._asset.total_supply

    def preview_redeem(self, amount: int) -> int:
        return amount * self._asset.redeem_numerator // self._asset.redeem_denominator

    def cooldown_seconds(self) -> int:
        return self._asset.cooldown_seconds

    def unstake_window_seconds(self) -> int:
        return self._asset.unstake_window_seconds

    def distribution_end_timestamp(self) -> int:
        return self._asset.distribution_end_timestamp

    def emission_per_second(self) -> int:
        return self._asset.emission_per_second

    def balance_of(self, user: str) -> int:
        state = self._user(user)
        return state.staked_balance if state else 0

    def total_rewards_balance(self, user: str) -> int:
        state = self._user(user)
        return state.claimable_rewards if state else 0

    def underlying_balance_of(self, user: str) -> int:
        state = self._user(user)
        return state.underlying_balance if state else 0

    def cooldown_state(self, user: str) -> tuple[int, int]:
        state = self._user(user)
        if state is None:
            return 0, 0
        return state.cooldown_started_at, state.cooldown_amount
