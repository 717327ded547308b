"""Aggregator configuration: staked asset instances and their price feeds."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from src.data.constants import STK_AAVE, STK_BPT
from src.data.contracts import (
    CHAINLINK_AAVE_ETH_FEED,
    CHAINLINK_ETH_USD_FEED,
    STAKED_TOKEN_ADDRESSES,
)
from src.data.errors import InvalidConfiguration
from src.data.static_sources import AAVE_ETH_FEED, ABPT_ETH_FEED, ETH_USD_FEED
from src.staking.models import AssetKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StakedAssetConfig:
    """One configured staked asset instance."""

    symbol: str
    address: str
    kind: AssetKind
    reward_price_feed: str
    staked_price_feed: str | None = None  # Required for POOL_BACKED


@dataclass(frozen=True)
class AggregatorConfig:
    """Everything the aggregation service needs, fixed at construction."""

    assets: tuple[StakedAssetConfig, ...]
    reference_price_feed: str

    def asset(self, symbol: str) -> StakedAssetConfig:
        for asset in self.assets:
            if asset.symbol == symbol:
                return asset
        raise InvalidConfiguration(f"Unknown staked asset: {symbol}")

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(asset.symbol for asset in self.assets)

    def validate(self) -> AggregatorConfig:
        """Check feed mappings and asset kinds; return self for chaining."""
        if not self.reference_price_feed:
            raise InvalidConfiguration("Missing reference price feed")

        seen: set[str] = set()
        for asset in self.assets:
            if asset.symbol in seen:
                raise InvalidConfiguration(f"Duplicate staked asset: {asset.symbol}")
            seen.add(asset.symbol)

            if not isinstance(asset.kind, AssetKind):
                raise InvalidConfiguration(
                    f"Unsupported asset kind for {asset.symbol}: {asset.kind!r}"
                )
            if not asset.reward_price_feed:
                raise InvalidConfiguration(f"Missing reward price feed for {asset.symbol}")
            if asset.kind is AssetKind.POOL_BACKED and not asset.staked_price_feed:
                raise InvalidConfiguration(
                    f"Pool-backed asset {asset.symbol} needs a staked price feed"
                )
        return self


def load_config(env: Mapping[str, str] | None = None) -> AggregatorConfig:
    """Build the mainnet configuration, applying environment overrides.

    Recognised variables: ``STKAAVE_ADDRESS``, ``STKBPT_ADDRESS``,
    ``AAVE_PRICE_FEED``, ``BPT_PRICE_FEED``, ``REFERENCE_PRICE_FEED``.

    There is no well-known mainnet feed for the pool token, so stkABPT is
    only configured when ``BPT_PRICE_FEED`` is set.
    """
    env = os.environ if env is None else env

    aave_feed = env.get("AAVE_PRICE_FEED") or CHAINLINK_AAVE_ETH_FEED
    assets = [
        StakedAssetConfig(
            symbol=STK_AAVE,
            address=env.get("STKAAVE_ADDRESS") or STAKED_TOKEN_ADDRESSES[STK_AAVE],
            kind=AssetKind.SINGLE_ASSET,
            reward_price_feed=aave_feed,
        ),
    ]

    bpt_feed = env.get("BPT_PRICE_FEED")
    if bpt_feed:
        assets.append(
            StakedAssetConfig(
                symbol=STK_BPT,
                address=env.get("STKBPT_ADDRESS") or STAKED_TOKEN_ADDRESSES[STK_BPT],
                kind=AssetKind.POOL_BACKED,
                reward_price_feed=aave_feed,
                staked_price_feed=bpt_feed,
            )
        )
    else:
        logger.info("BPT_PRICE_FEED not set; %s is not configured", STK_BPT)

    return AggregatorConfig(
        assets=tuple(assets),
        reference_price_feed=env.get("REFERENCE_PRICE_FEED") or CHAINLINK_ETH_USD_FEED,
    ).validate()


def static_config() -> AggregatorConfig:
    """Configuration matching the feeds and assets of the static sources."""
    return AggregatorConfig(
        assets=(
            StakedAssetConfig(
                symbol=STK_AAVE,
                address=STAKED_TOKEN_ADDRESSES[STK_AAVE],
                kind=AssetKind.SINGLE_ASSET,
                reward_price_feed=AAVE_ETH_FEED,
            ),
            StakedAssetConfig(
                symbol=STK_BPT,
                address=STAKED_TOKEN_ADDRESSES[STK_BPT],
                kind=AssetKind.POOL_BACKED,
                reward_price_feed=AAVE_ETH_FEED,
                staked_price_feed=ABPT_ETH_FEED,
            ),
        ),
        reference_price_feed=ETH_USD_FEED,
    ).validate()
