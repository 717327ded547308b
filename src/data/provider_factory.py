"""Factory for wiring sources and adapters, on-chain or static."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from src.data.adapters import PriceFeedAdapter, StakedAssetAdapter
from src.data.config import AggregatorConfig, load_config, static_config
from src.data.static_sources import StaticPriceFeedSource, StaticStakedAssetSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataSources:
    """Configuration together with the adapters built for it."""

    config: AggregatorConfig
    price_adapter: PriceFeedAdapter
    staked_adapters: Mapping[str, StakedAssetAdapter]
    onchain: bool


def create_static_sources() -> DataSources:
    config = static_config()
    return DataSources(
        config=config,
        price_adapter=PriceFeedAdapter(StaticPriceFeedSource()),
        staked_adapters={
            asset.symbol: StakedAssetAdapter(
                asset.symbol, StaticStakedAssetSource.for_symbol(asset.symbol)
            )
            for asset in config.assets
        },
        onchain=False,
    )


def create_onchain_sources(
    rpc_url: str,
    config: AggregatorConfig | None = None,
) -> DataSources:
    """Wire web3-backed sources for every asset in *config*."""
    from src.data.onchain_sources import (
        OnChainPriceFeedSource,
        OnChainStakedAssetSource,
        connect,
    )

    config = config or load_config()
    w3 = connect(rpc_url)
    return DataSources(
        config=config,
        price_adapter=PriceFeedAdapter(OnChainPriceFeedSource(w3)),
        staked_adapters={
            asset.symbol: StakedAssetAdapter(
                asset.symbol, OnChainStakedAssetSource(w3, asset.address)
            )
            for asset in config.assets
        },
        onchain=True,
    )


def create_sources(
    use_onchain: bool = False,
    rpc_url: str | None = None,
) -> DataSources:
    """Create data sources, selecting static or on-chain.

    Parameters
    ----------
    use_onchain : bool
        If True, attempt to build web3-backed sources.
    rpc_url : str | None
        Ethereum JSON-RPC URL.  Falls back to the ``ETH_RPC_URL``
        environment variable when not supplied.

    Returns
    -------
    DataSources
        On-chain sources when requested and available, otherwise the static
        ones.  The fallback only happens here, at construction; individual
        reads never fall back.
    """
    if not use_onchain:
        return create_static_sources()

    resolved_url = rpc_url or os.environ.get("ETH_RPC_URL")
    if not resolved_url:
        logger.warning("On-chain data requested but no RPC URL provided; using static data")
        return create_static_sources()

    try:
        return create_onchain_sources(resolved_url)
    except ImportError:
        logger.warning("web3 is not installed; falling back to static data")
        return create_static_sources()
    except Exception:
        logger.warning("Failed to create on-chain sources; using static data", exc_info=True)
        return create_static_sources()
