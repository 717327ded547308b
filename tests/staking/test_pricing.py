"""Tests for the per-kind pricing rules."""

import pytest

from src.data.errors import InvalidConfiguration
from src.staking.models import AssetKind
from src.staking.pricing import PRICING_RULES, PricingInputs, resolve_rule


class TestSingleAssetRule:
    rule = PRICING_RULES[AssetKind.SINGLE_ASSET]

    def test_staked_price_is_reward_price(self) -> None:
        pricing = self.rule.apply(
            PricingInputs(total_supply=1_000_000, distribution_per_second=10, reward_price=7)
        )
        assert pricing.staked_price == 7
        assert pricing.annualized_yield_rate == 3_153_600

    def test_ignores_prices_for_yield(self) -> None:
        a = self.rule.apply(PricingInputs(1_000_000, 10, reward_price=1))
        b = self.rule.apply(PricingInputs(1_000_000, 10, reward_price=10**18))
        assert a.annualized_yield_rate == b.annualized_yield_rate

    def test_does_not_need_staked_feed(self) -> None:
        assert self.rule.needs_staked_price_feed is False


class TestPoolBackedRule:
    rule = PRICING_RULES[AssetKind.POOL_BACKED]

    def test_value_weighted_yield(self) -> None:
        pricing = self.rule.apply(
            PricingInputs(total_supply=100, distribution_per_second=5, reward_price=2, staked_price=4)
        )
        assert pricing.staked_price == 4
        assert pricing.annualized_yield_rate == 7_884_000_000

    @pytest.mark.parametrize("factor", [2, 10, 10**18])
    def test_invariant_under_common_price_scaling(self, factor: int) -> None:
        base = self.rule.apply(PricingInputs(100, 5, reward_price=2, staked_price=4))
        scaled = self.rule.apply(
            PricingInputs(100, 5, reward_price=2 * factor, staked_price=4 * factor)
        )
        assert scaled.annualized_yield_rate == base.annualized_yield_rate

    def test_zero_staked_price(self) -> None:
        pricing = self.rule.apply(PricingInputs(100, 5, reward_price=2, staked_price=0))
        assert pricing.annualized_yield_rate == 0

    def test_missing_staked_price(self) -> None:
        with pytest.raises(InvalidConfiguration):
            self.rule.apply(PricingInputs(100, 5, reward_price=2))

    def test_needs_staked_feed(self) -> None:
        assert self.rule.needs_staked_price_feed is True


class TestResolveRule:
    def test_known_kinds(self) -> None:
        for kind in AssetKind:
            assert resolve_rule(kind).kind is kind

    def test_unregistered_kind(self) -> None:
        rules = {AssetKind.SINGLE_ASSET: PRICING_RULES[AssetKind.SINGLE_ASSET]}
        with pytest.raises(InvalidConfiguration):
            resolve_rule(AssetKind.POOL_BACKED, rules)
