"""Adapters turning raw source reads into typed state records.

Every read goes straight to the underlying source.  There are no retries,
no caches and no fallback values: a failed read is logged and re-raised as
:class:`SourceUnavailable` naming the source and the field.  A negative
reading of a uint256 quantity is rejected the same way.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from src.data.errors import SourceUnavailable
from src.data.interfaces import (
    PriceFeedSource,
    ProtocolState,
    StakedAssetSource,
    UserState,
)

logger = logging.getLogger(__name__)


def _read(source_name: str, field: str, fetcher: Callable[[], Any]) -> Any:
    """Run a single source read, mapping any failure to SourceUnavailable."""
    try:
        return fetcher()
    except SourceUnavailable:
        raise
    except Exception as exc:
        logger.warning("Read failed for %s.%s", source_name, field, exc_info=True)
        raise SourceUnavailable(source_name, field, str(exc) or type(exc).__name__) from exc


def _read_amount(source_name: str, field: str, fetcher: Callable[[], Any]) -> int:
    """Like :func:`_read`, for uint256 quantities that can never be negative."""
    value = _read(source_name, field, fetcher)
    if value < 0:
        raise SourceUnavailable(source_name, field, f"negative value {value}")
    return value


class PriceFeedAdapter:
    """Reads the latest price for a feed identifier."""

    def __init__(self, source: PriceFeedSource) -> None:
        self._source = source

    def get_latest_price(self, feed_id: str) -> int:
        """Return the latest reported price verbatim (no rescaling)."""
        return _read(feed_id, "latestAnswer", lambda: self._source.latest_price(feed_id))


class StakedAssetAdapter:
    """Reads staking contract state for one staked asset instance.

    Parameters
    ----------
    symbol : str
        Name of the staked asset instance, used in errors and logs.
    source : StakedAssetSource
        Underlying contract wrapper.
    """

    def __init__(self, symbol: str, source: StakedAssetSource) -> None:
        self.symbol = symbol
        self._source = source

    def get_protocol_state(self) -> ProtocolState:
        s = self._source
        return ProtocolState(
            total_supply=_read_amount(self.symbol, "totalSupply", s.total_supply),
            cooldown_seconds=_read_amount(self.symbol, "cooldownSeconds", s.cooldown_seconds),
            unstake_window_seconds=_read_amount(
                self.symbol, "unstakeWindowSeconds", s.unstake_window_seconds
            ),
            distribution_end_timestamp=_read_amount(
                self.symbol, "distributionEndTimestamp", s.distribution_end_timestamp
            ),
            raw_emission_per_second=_read_amount(
                self.symbol, "emissionPerSecond", s.emission_per_second
            ),
        )

    def preview_redeem(self, amount: int) -> int:
        """Projected underlying value of *amount* staked units."""
        return _read_amount(
            self.symbol, "previewRedeem", lambda: self._source.preview_redeem(amount)
        )

    def get_user_state(self, user: str) -> UserState:
        s = self._source
        started_at, amount = _read(
            self.symbol, "cooldownState", lambda: s.cooldown_state(user)
        )
        if started_at < 0 or amount < 0:
            raise SourceUnavailable(
                self.symbol, "cooldownState", f"negative value ({started_at}, {amount})"
            )
        return UserState(
            staked_balance=_read_amount(self.symbol, "balanceOf", lambda: s.balance_of(user)),
            claimable_rewards=_read_amount(
                self.symbol, "totalRewardsBalance", lambda: s.total_rewards_balance(user)
            ),
            underlying_balance=_read_amount(
                self.symbol, "underlyingBalanceOf", lambda: s.underlying_balance_of(user)
            ),
            cooldown_started_at=started_at,
            cooldown_amount=amount,
        )
