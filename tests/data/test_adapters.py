"""Tests for the price feed and staked asset adapters."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from src.data.adapters import PriceFeedAdapter, StakedAssetAdapter
from src.data.errors import SourceUnavailable
from src.data.interfaces import ProtocolState, UserState
from src.data.static_sources import StaticStakedAsset, StaticStakedAssetSource

USER = "0x00000000000000000000000000000000000000bb"


@pytest.fixture
def staked_source() -> MagicMock:
    source = MagicMock()
    source.total_supply.return_value = 1_000
    source.cooldown_seconds.return_value = 864_000
    source.unstake_window_seconds.return_value = 172_800
    source.distribution_end_timestamp.return_value = 1_800_000_000
    source.emission_per_second.return_value = 10
    source.preview_redeem.side_effect = lambda amount: amount * 2
    source.balance_of.return_value = 300
    source.total_rewards_balance.return_value = 12
    source.underlying_balance_of.return_value = 50
    source.cooldown_state.return_value = (1_700_000_000, 100)
    return source


class TestPriceFeedAdapter:
    def test_returns_price_verbatim(self) -> None:
        source = MagicMock()
        source.latest_price.return_value = 45_000_000_000_000_000
        assert PriceFeedAdapter(source).get_latest_price("AAVE/ETH") == 45_000_000_000_000_000
        source.latest_price.assert_called_once_with("AAVE/ETH")

    def test_no_rescaling_of_negative_answer(self) -> None:
        source = MagicMock()
        source.latest_price.return_value = -5
        assert PriceFeedAdapter(source).get_latest_price("X") == -5

    def test_failure_names_feed(self) -> None:
        source = MagicMock()
        source.latest_price.side_effect = ConnectionError("read timed out")
        with pytest.raises(SourceUnavailable) as exc_info:
            PriceFeedAdapter(source).get_latest_price("AAVE/ETH")
        err = exc_info.value
        assert err.source == "AAVE/ETH"
        assert err.field == "latestAnswer"
        assert "read timed out" in str(err)
        assert isinstance(err.__cause__, ConnectionError)

    def test_no_retry(self) -> None:
        source = MagicMock()
        source.latest_price.side_effect = ConnectionError()
        with pytest.raises(SourceUnavailable):
            PriceFeedAdapter(source).get_latest_price("AAVE/ETH")
        assert source.latest_price.call_count == 1


class TestStakedAssetAdapter:
    def test_protocol_state(self, staked_source: MagicMock) -> None:
        state = StakedAssetAdapter("stkAAVE", staked_source).get_protocol_state()
        assert state == ProtocolState(
            total_supply=1_000,
            cooldown_seconds=864_000,
            unstake_window_seconds=172_800,
            distribution_end_timestamp=1_800_000_000,
            raw_emission_per_second=10,
        )

    def test_preview_redeem(self, staked_source: MagicMock) -> None:
        assert StakedAssetAdapter("stkAAVE", staked_source).preview_redeem(21) == 42

    def test_user_state(self, staked_source: MagicMock) -> None:
        state = StakedAssetAdapter("stkAAVE", staked_source).get_user_state(USER)
        assert state == UserState(
            staked_balance=300,
            claimable_rewards=12,
            underlying_balance=50,
            cooldown_started_at=1_700_000_000,
            cooldown_amount=100,
        )
        staked_source.balance_of.assert_called_once_with(USER)

    @pytest.mark.parametrize(
        "method, field",
        [
            ("total_supply", "totalSupply"),
            ("cooldown_seconds", "cooldownSeconds"),
            ("unstake_window_seconds", "unstakeWindowSeconds"),
            ("distribution_end_timestamp", "distributionEndTimestamp"),
            ("emission_per_second", "emissionPerSecond"),
        ],
    )
    def test_protocol_field_failure(
        self, staked_source: MagicMock, method: str, field: str
    ) -> None:
        getattr(staked_source, method).side_effect = RuntimeError("execution reverted")
        with pytest.raises(SourceUnavailable) as exc_info:
            StakedAssetAdapter("stkAAVE", staked_source).get_protocol_state()
        assert exc_info.value.source == "stkAAVE"
        assert exc_info.value.field == field

    def test_user_field_failure_is_not_defaulted(self, staked_source: MagicMock) -> None:
        staked_source.underlying_balance_of.side_effect = RuntimeError("boom")
        with pytest.raises(SourceUnavailable) as exc_info:
            StakedAssetAdapter("stkAAVE", staked_source).get_user_state(USER)
        assert exc_info.value.field == "underlyingBalanceOf"

    def test_preview_redeem_failure(self, staked_source: MagicMock) -> None:
        staked_source.preview_redeem.side_effect = RuntimeError("boom")
        with pytest.raises(SourceUnavailable) as exc_info:
            StakedAssetAdapter("stkAAVE", staked_source).preview_redeem(1)
        assert exc_info.value.field == "previewRedeem"

    @pytest.mark.parametrize(
        "method, field",
        [
            ("total_supply", "totalSupply"),
            ("cooldown_seconds", "cooldownSeconds"),
            ("unstake_window_seconds", "unstakeWindowSeconds"),
            ("distribution_end_timestamp", "distributionEndTimestamp"),
            ("emission_per_second", "emissionPerSecond"),
        ],
    )
    def test_negative_protocol_field(
        self, staked_source: MagicMock, method: str, field: str
    ) -> None:
        getattr(staked_source, method).return_value = -5
        with pytest.raises(SourceUnavailable) as exc_info:
            StakedAssetAdapter("stkAAVE", staked_source).get_protocol_state()
        assert exc_info.value.source == "stkAAVE"
        assert exc_info.value.field == field
        assert "negative value -5" in str(exc_info.value)

    @pytest.mark.parametrize(
        "method, field",
        [
            ("balance_of", "balanceOf"),
            ("total_rewards_balance", "totalRewardsBalance"),
            ("underlying_balance_of", "underlyingBalanceOf"),
        ],
    )
    def test_negative_user_field(
        self, staked_source: MagicMock, method: str, field: str
    ) -> None:
        getattr(staked_source, method).return_value = -1
        with pytest.raises(SourceUnavailable) as exc_info:
            StakedAssetAdapter("stkAAVE", staked_source).get_user_state(USER)
        assert exc_info.value.field == field

    def test_negative_cooldown_state(self, staked_source: MagicMock) -> None:
        staked_source.cooldown_state.return_value = (1_700_000_000, -100)
        with pytest.raises(SourceUnavailable) as exc_info:
            StakedAssetAdapter("stkAAVE", staked_source).get_user_state(USER)
        assert exc_info.value.field == "cooldownState"

    def test_negative_preview_redeem(self, staked_source: MagicMock) -> None:
        staked_source.preview_redeem.side_effect = lambda amount: -amount
        with pytest.raises(SourceUnavailable) as exc_info:
            StakedAssetAdapter("stkAAVE", staked_source).preview_redeem(3)
        assert exc_info.value.field == "previewRedeem"


class TestStaticStakedAssetSource:
    def test_unknown_user_reads_zero(self) -> None:
        source = StaticStakedAssetSource.for_symbol("stkAAVE")
        assert source.balance_of(USER) == 0
        assert source.cooldown_state(USER) == (0, 0)

    def test_user_lookup_is_case_insensitive(self) -> None:
        state = UserState(1, 2, 3, 4, 5)
        source = StaticStakedAssetSource(
            StaticStakedAsset(
                total_supply=10,
                cooldown_seconds=1,
                unstake_window_seconds=1,
                distribution_end_timestamp=1,
                emission_per_second=1,
                users={USER: state},
            )
        )
        assert source.balance_of(USER.upper().replace("0X", "0x")) == 1
        assert source.cooldown_state(USER) == (4, 5)

    def test_preview_redeem_ratio(self) -> None:
        source = StaticStakedAssetSource(
            StaticStakedAsset(
                total_supply=10,
                cooldown_seconds=1,
                unstake_window_seconds=1,
                distribution_end_timestamp=1,
                emission_per_second=1,
                redeem_numerator=3,
                redeem_denominator=2,
            )
        )
        assert source.preview_redeem(10) == 15
        assert source.preview_redeem(1) == 1
