"""Shared builders for aggregation tests."""

from __future__ import annotations

from dataclasses import replace

import pytest

from src.data.adapters import PriceFeedAdapter, StakedAssetAdapter
from src.data.config import AggregatorConfig, StakedAssetConfig
from src.data.interfaces import UserState
from src.data.static_sources import (
    StaticPriceFeedSource,
    StaticStakedAsset,
    StaticStakedAssetSource,
)
from src.staking.aggregation import AggregationService
from src.staking.models import AssetKind

NOW = 1_700_000_000
USER = "0x00000000000000000000000000000000000000aa"

SINGLE = StakedAssetConfig(
    symbol="stkAAVE",
    address="0x4da27a545c0c5B758a6BA100e3a049001de870f5",
    kind=AssetKind.SINGLE_ASSET,
    reward_price_feed="AAVE/ETH",
)
POOL = StakedAssetConfig(
    symbol="stkABPT",
    address="0xa1116930326D21fB917d5A27F1E9943A9595fb47",
    kind=AssetKind.POOL_BACKED,
    reward_price_feed="AAVE/ETH",
    staked_price_feed="ABPT/ETH",
)
CONFIG = AggregatorConfig(assets=(SINGLE, POOL), reference_price_feed="ETH/USD")

# Small round numbers so expected APYs are easy to check by hand
SINGLE_ASSET = StaticStakedAsset(
    total_supply=1_000_000,
    cooldown_seconds=864_000,
    unstake_window_seconds=172_800,
    distribution_end_timestamp=NOW + 86_400,
    emission_per_second=10,
)
POOL_ASSET = StaticStakedAsset(
    total_supply=100,
    cooldown_seconds=864_000,
    unstake_window_seconds=172_800,
    distribution_end_timestamp=NOW + 86_400,
    emission_per_second=5,
)
PRICES = {"AAVE/ETH": 2, "ABPT/ETH": 4, "ETH/USD": 2_500_00000000}


def build_service(
    single: StaticStakedAsset = SINGLE_ASSET,
    pool: StaticStakedAsset = POOL_ASSET,
    prices: dict[str, int] | None = None,
    now: int = NOW,
    **kwargs,
) -> AggregationService:
    return AggregationService(
        CONFIG,
        PriceFeedAdapter(StaticPriceFeedSource(PRICES if prices is None else prices)),
        {
            SINGLE.symbol: StakedAssetAdapter(SINGLE.symbol, StaticStakedAssetSource(single)),
            POOL.symbol: StakedAssetAdapter(POOL.symbol, StaticStakedAssetSource(pool)),
        },
        clock=lambda: now,
        **kwargs,
    )


def with_user(asset: StaticStakedAsset, state: UserState) -> StaticStakedAsset:
    return replace(asset, users={USER: state})


@pytest.fixture
def make_service():
    """The ``build_service`` builder, for tests that vary sources or clock."""
    return build_service


@pytest.fixture
def make_user_asset():
    """The ``with_user`` helper: attach a UserState for ``USER`` to an asset."""
    return with_user


@pytest.fixture
def scenario() -> dict:
    """Scenario constants shared by the aggregation tests."""
    return {
        "now": NOW,
        "user": USER,
        "single": SINGLE_ASSET,
        "pool": POOL_ASSET,
        "prices": dict(PRICES),
        "config": CONFIG,
    }


@pytest.fixture
def service() -> AggregationService:
    return build_service()
