"""Per-kind pricing rules for staked assets.

Each :class:`AssetKind` maps to a :class:`PricingRule` that derives the
staked asset's price and its APY from the values read for it.  Supporting a
new kind means registering a new rule; existing rules stay untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from src.data.errors import InvalidConfiguration
from src.staking.apy import compute_apy
from src.staking.models import AssetKind


@dataclass(frozen=True)
class PricingInputs:
    """Values a pricing rule works from."""

    total_supply: int
    distribution_per_second: int
    reward_price: int
    staked_price: int | None = None  # Only read for rules that need a staked feed


@dataclass(frozen=True)
class Pricing:
    staked_price: int
    annualized_yield_rate: int


@dataclass(frozen=True)
class PricingRule:
    kind: AssetKind
    needs_staked_price_feed: bool
    apply: Callable[[PricingInputs], Pricing]


def _price_single_asset(inputs: PricingInputs) -> Pricing:
    # Staked and reward units are the same asset: unit-for-unit yield
    return Pricing(
        staked_price=inputs.reward_price,
        annualized_yield_rate=compute_apy(inputs.distribution_per_second, inputs.total_supply),
    )


def _price_pool_backed(inputs: PricingInputs) -> Pricing:
    if inputs.staked_price is None:
        raise InvalidConfiguration("Pool-backed pricing needs a staked asset price")
    # Value-for-value yield: both sides converted to the reference currency
    return Pricing(
        staked_price=inputs.staked_price,
        annualized_yield_rate=compute_apy(
            inputs.distribution_per_second * inputs.reward_price,
            inputs.total_supply * inputs.staked_price,
        ),
    )


PRICING_RULES: Mapping[AssetKind, PricingRule] = MappingProxyType(
    {
        AssetKind.SINGLE_ASSET: PricingRule(
            kind=AssetKind.SINGLE_ASSET,
            needs_staked_price_feed=False,
            apply=_price_single_asset,
        ),
        AssetKind.POOL_BACKED: PricingRule(
            kind=AssetKind.POOL_BACKED,
            needs_staked_price_feed=True,
            apply=_price_pool_backed,
        ),
    }
)


def resolve_rule(
    kind: AssetKind,
    rules: Mapping[AssetKind, PricingRule] = PRICING_RULES,
) -> PricingRule:
    """Look up the rule for *kind*, rejecting unregistered kinds."""
    try:
        return rules[kind]
    except KeyError:
        raise InvalidConfiguration(f"No pricing rule for asset kind {kind!r}") from None
