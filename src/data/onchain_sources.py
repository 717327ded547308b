"""On-chain sources reading staked token and Chainlink contracts via web3.py."""

from __future__ import annotations

import logging
from typing import Any

from src.data.contracts import CHAINLINK_FEED_ABI, ERC20_ABI, STAKED_TOKEN_ABI
from src.data.interfaces import PriceFeedSource, StakedAssetSource

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 30.0


def connect(rpc_url: str, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> Any:
    """Create a ``Web3`` client for *rpc_url*.

    The timeout bounds every JSON-RPC request, so no read can block
    indefinitely.
    """
    from web3 import Web3

    logger.info("Connecting to RPC endpoint %s...", rpc_url[:20])
    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))


class OnChainPriceFeedSource(PriceFeedSource):
    """Chainlink aggregator reads; ``feed_id`` is the aggregator address."""

    def __init__(self, w3: Any) -> None:
        self._w3 = w3

    def latest_price(self, feed_id: str) -> int:
        feed = self._w3.eth.contract(
            address=self._w3.to_checksum_address(feed_id),
            abi=CHAINLINK_FEED_ABI,
        )
        return feed.functions.latestAnswer().call()


class OnChainStakedAssetSource(StakedAssetSource):
    """Live reads from a staked token contract.

    Parameters
    ----------
    w3 : Web3
        Connected client (see :func:`connect`).
    address : str
        Staked token contract address.
    """

    def __init__(self, w3: Any, address: str) -> None:
        self._w3 = w3
        self.address = self._w3.to_checksum_address(address)

        # No RPC calls here
        self._token = self._w3.eth.contract(address=self.address, abi=STAKED_TOKEN_ABI)

        # Lazily resolved; the underlying token of a staked token never changes
        self._underlying: Any = None

    def _underlying_token(self) -> Any:
        if self._underlying is None:
            addr = self._token.functions.STAKED_TOKEN().call()
            self._underlying = self._w3.eth.contract(
                address=self._w3.to_checksum_address(addr),
                abi=ERC20_ABI,
            )
        return self._underlying

    def total_supply(self) -> int:
        return self._token.functions.totalSupply().call()

    def preview_redeem(self, amount: int) -> int:
        return self._token.functions.previewRedeem(amount).call()

    def cooldown_seconds(self) -> int:
        return self._token.functions.getCooldownSeconds().call()

    def unstake_window_seconds(self) -> int:
        return self._token.functions.UNSTAKE_WINDOW().call()

    def distribution_end_timestamp(self) -> int:
        return self._token.functions.DISTRIBUTION_END().call()

    def emission_per_second(self) -> int:
        # assets(asset) -> (emissionPerSecond, lastUpdateTimestamp, index)
        return self._token.functions.assets(self.address).call()[0]

    def balance_of(self, user: str) -> int:
        return self._token.functions.balanceOf(self._w3.to_checksum_address(user)).call()

    def total_rewards_balance(self, user: str) -> int:
        return self._token.functions.getTotalRewardsBalance(
            self._w3.to_checksum_address(user),
        ).call()

    def underlying_balance_of(self, user: str) -> int:
        return self._underlying_token().functions.balanceOf(
            self._w3.to_checksum_address(user),
        ).call()

    def cooldown_state(self, user: str) -> tuple[int, int]:
        started_at, amount = self._token.functions.stakersCooldowns(
            self._w3.to_checksum_address(user),
        ).call()
        return int(started_at), int(amount)
