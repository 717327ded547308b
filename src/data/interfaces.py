"""Abstract source interfaces and the raw state records read through them."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProtocolState:
    """Protocol-level state of one staked asset instance."""

    total_supply: int
    cooldown_seconds: int
    unstake_window_seconds: int
    distribution_end_timestamp: int
    raw_emission_per_second: int  # Configured rate, not clamped to distribution end


@dataclass(frozen=True)
class UserState:
    """Per-user state of one staked asset instance."""

    staked_balance: int
    claimable_rewards: int
    underlying_balance: int
    cooldown_started_at: int  # 0 when no cooldown is active
    cooldown_amount: int


class PriceFeedSource(ABC):
    """Abstract interface for price feed reads."""

    @abstractmethod
    def latest_price(self, feed_id: str) -> int:
        """Latest answer reported by *feed_id*, unscaled."""


class StakedAssetSource(ABC):
    """Abstract interface for one staked asset contract."""

    @abstractmethod
    def total_supply(self) -> int:
        """Total issued units of the staked asset."""

    @abstractmethod
    def preview_redeem(self, amount: int) -> int:
        """Underlying amount redeemable for *amount* staked units."""

    @abstractmethod
    def cooldown_seconds(self) -> int:
        """Cooldown duration before an unstake is allowed."""

    @abstractmethod
    def unstake_window_seconds(self) -> int:
        """Window after the cooldown during which unstaking is allowed."""

    @abstractmethod
    def distribution_end_timestamp(self) -> int:
        """Epoch seconds after which emission stops."""

    @abstractmethod
    def emission_per_second(self) -> int:
        """Configured reward emission per second for this asset."""

    @abstractmethod
    def balance_of(self, user: str) -> int:
        """Staked units held by *user*."""

    @abstractmethod
    def total_rewards_balance(self, user: str) -> int:
        """Accrued, unclaimed rewards of *user*."""

    @abstractmethod
    def underlying_balance_of(self, user: str) -> int:
        """Balance of the unstaked underlying asset held by *user*."""

    @abstractmethod
    def cooldown_state(self, user: str) -> tuple[int, int]:
        """``(started_at, amount)`` of the user's cooldown, zeros if none."""
