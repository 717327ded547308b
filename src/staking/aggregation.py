"""Aggregation of staked asset snapshots, user positions and a reference price.

Every call reads its sources afresh.  Reads are fanned out on a call-local
thread pool in two phases:

1. protocol state, reward / staked prices, user state and the reference
   price for every requested asset;
2. the ``previewRedeem`` projections, which need the supply and balances
   read in phase 1.

The first failed read propagates as soon as it is known.  Queued reads are
cancelled, so a response is either complete or not returned at all.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterable, Mapping

from src.data.adapters import PriceFeedAdapter, StakedAssetAdapter
from src.data.config import AggregatorConfig, StakedAssetConfig
from src.data.errors import InvalidConfiguration, SourceUnavailable
from src.data.interfaces import ProtocolState, UserState
from src.staking.models import (
    AggregateView,
    StakedAssetSnapshot,
    StakedAssetView,
    UserPosition,
)
from src.staking.pricing import PRICING_RULES, PricingInputs, PricingRule, resolve_rule

if TYPE_CHECKING:
    from src.data.provider_factory import DataSources

logger = logging.getLogger(__name__)


@dataclass
class _PendingAsset:
    """Phase 1 futures for one asset."""

    asset: StakedAssetConfig
    rule: PricingRule
    adapter: StakedAssetAdapter
    protocol_state: Future
    reward_price: Future
    staked_price: Future | None
    user_state: Future | None

    def futures(self) -> list[Future]:
        return [
            f
            for f in (self.protocol_state, self.reward_price, self.staked_price, self.user_state)
            if f is not None
        ]


def _raise_first_failure(futures: list[Future]) -> None:
    """Wait for *futures* until all are done or one fails, then re-raise that failure."""
    done, _ = wait(futures, return_when=FIRST_EXCEPTION)
    for future in done:
        exc = future.exception()
        if exc is not None:
            raise exc


def _checked_price(feed_id: str, price: int) -> int:
    if price < 0:
        raise SourceUnavailable(feed_id, "latestAnswer", f"negative price {price}")
    return price


def distribution_per_second(state: ProtocolState, now: int) -> int:
    """Emission rate in effect at *now*; zero once the distribution ended."""
    if now < state.distribution_end_timestamp:
        return state.raw_emission_per_second
    return 0


class AggregationService:
    """Builds staked asset views from price feeds and staked token sources.

    Parameters
    ----------
    config : AggregatorConfig
        Staked assets, their kinds and feed mappings.
    price_adapter : PriceFeedAdapter
        Shared price feed reader.
    staked_adapters : Mapping[str, StakedAssetAdapter]
        One adapter per configured symbol.
    rules : Mapping[AssetKind, PricingRule]
        Pricing rule per asset kind (defaults to the built-in rules).
    clock : Callable[[], float]
        Epoch seconds; sampled once per call.
    max_workers : int | None
        Thread pool size for fanned-out reads.
    """

    def __init__(
        self,
        config: AggregatorConfig,
        price_adapter: PriceFeedAdapter,
        staked_adapters: Mapping[str, StakedAssetAdapter],
        rules: Mapping = PRICING_RULES,
        clock: Callable[[], float] = time.time,
        max_workers: int | None = None,
    ) -> None:
        self._config = config.validate()
        self._price_adapter = price_adapter
        self._staked_adapters = MappingProxyType(dict(staked_adapters))
        self._rules = MappingProxyType(dict(rules))
        self._clock = clock
        self._max_workers = max_workers

        for asset in self._config.assets:
            if asset.symbol not in self._staked_adapters:
                raise InvalidConfiguration(f"No staked asset source for {asset.symbol}")
            rule = resolve_rule(asset.kind, self._rules)
            if rule.needs_staked_price_feed and not asset.staked_price_feed:
                raise InvalidConfiguration(f"Missing staked price feed for {asset.symbol}")

    @classmethod
    def from_sources(cls, sources: DataSources, **kwargs) -> AggregationService:
        return cls(sources.config, sources.price_adapter, sources.staked_adapters, **kwargs)

    @property
    def config(self) -> AggregatorConfig:
        return self._config

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def get_all_staked_assets(self) -> AggregateView:
        """Snapshots of every configured staked asset plus the reference price."""
        return self.get_staked_assets_batch(self._config.symbols)

    def get_staked_asset(self, symbol: str) -> StakedAssetSnapshot:
        views, _ = self._collect([symbol], user=None)
        return views[0].snapshot

    def get_all_staked_assets_with_user(self, user: str) -> AggregateView:
        """Snapshots and *user*'s positions for every configured staked asset."""
        return self.get_staked_assets_batch(self._config.symbols, user=user)

    def get_staked_asset_with_user(self, symbol: str, user: str) -> StakedAssetView:
        views, _ = self._collect([symbol], user=user)
        return views[0]

    def get_staked_assets_batch(
        self,
        symbols: Iterable[str],
        user: str | None = None,
    ) -> AggregateView:
        """Views for a subset of the configured assets plus the reference price."""
        feed = self._config.reference_price_feed
        views, prices = self._collect(list(symbols), user=user, feeds=(feed,))
        return AggregateView(assets=views, reference_price=prices[feed])

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _collect(
        self,
        symbols: list[str],
        user: str | None,
        feeds: tuple[str, ...] = (),
    ) -> tuple[tuple[StakedAssetView, ...], dict[str, int]]:
        """Read *symbols* (and the extra price *feeds*) and build their views."""
        # Resolve everything up front so bad input fails before any read
        assets = [self._config.asset(symbol) for symbol in symbols]
        now = int(self._clock())

        pool = ThreadPoolExecutor(max_workers=self._max_workers)
        try:
            feed_reads = {
                feed: pool.submit(self._price_adapter.get_latest_price, feed) for feed in feeds
            }
            pending = [self._submit_reads(pool, asset, user) for asset in assets]
            _raise_first_failure(
                [*feed_reads.values(), *(f for p in pending for f in p.futures())]
            )

            states = [p.protocol_state.result() for p in pending]
            user_states = [p.user_state.result() if p.user_state else None for p in pending]

            # Phase 2: projections depending on phase 1
            redeem_totals = [
                pool.submit(p.adapter.preview_redeem, state.total_supply)
                for p, state in zip(pending, states)
            ]
            redeem_users = [
                pool.submit(p.adapter.preview_redeem, us.staked_balance) if us else None
                for p, us in zip(pending, user_states)
            ]
            _raise_first_failure([*redeem_totals, *(f for f in redeem_users if f)])

            views = tuple(
                self._build_view(
                    p,
                    state,
                    total_redeem.result(),
                    us,
                    user_redeem.result() if user_redeem else None,
                    user,
                    now,
                )
                for p, state, total_redeem, us, user_redeem in zip(
                    pending, states, redeem_totals, user_states, redeem_users
                )
            )
            prices = {feed: _checked_price(feed, f.result()) for feed, f in feed_reads.items()}
        except BaseException:
            # Reads still in flight are abandoned, not awaited
            pool.shutdown(wait=False, cancel_futures=True)
            raise
        pool.shutdown(wait=True)

        logger.debug(
            "Aggregated %d staked asset(s) at t=%d (user=%s)", len(views), now, user
        )
        return views, prices

    def _submit_reads(
        self,
        pool: ThreadPoolExecutor,
        asset: StakedAssetConfig,
        user: str | None,
    ) -> _PendingAsset:
        rule = resolve_rule(asset.kind, self._rules)
        adapter = self._staked_adapters[asset.symbol]
        get_price = self._price_adapter.get_latest_price

        staked_price = None
        if rule.needs_staked_price_feed:
            staked_price = pool.submit(get_price, asset.staked_price_feed)

        return _PendingAsset(
            asset=asset,
            rule=rule,
            adapter=adapter,
            protocol_state=pool.submit(adapter.get_protocol_state),
            reward_price=pool.submit(get_price, asset.reward_price_feed),
            staked_price=staked_price,
            user_state=pool.submit(adapter.get_user_state, user) if user is not None else None,
        )

    def _build_view(
        self,
        pending: _PendingAsset,
        state: ProtocolState,
        total_redeemable_value: int,
        user_state: UserState | None,
        user_redeemable_value: int | None,
        user: str | None,
        now: int,
    ) -> StakedAssetView:
        asset = pending.asset
        reward_price = _checked_price(asset.reward_price_feed, pending.reward_price.result())
        staked_price = None
        if pending.staked_price is not None:
            staked_price = _checked_price(asset.staked_price_feed, pending.staked_price.result())

        dps = distribution_per_second(state, now)
        pricing = pending.rule.apply(
            PricingInputs(
                total_supply=state.total_supply,
                distribution_per_second=dps,
                reward_price=reward_price,
                staked_price=staked_price,
            )
        )

        snapshot = StakedAssetSnapshot(
            symbol=asset.symbol,
            kind=asset.kind,
            total_supply=state.total_supply,
            total_redeemable_value=total_redeemable_value,
            cooldown_seconds=state.cooldown_seconds,
            unstake_window_seconds=state.unstake_window_seconds,
            reward_asset_price_in_reference_currency=reward_price,
            distribution_end_timestamp=state.distribution_end_timestamp,
            distribution_per_second=dps,
            staked_asset_price_in_reference_currency=pricing.staked_price,
            annualized_yield_rate=pricing.annualized_yield_rate,
        )

        position = None
        if user_state is not None and user_redeemable_value is not None:
            position = UserPosition(
                user=user or "",
                staked_balance=user_state.staked_balance,
                claimable_rewards=user_state.claimable_rewards,
                underlying_balance=user_state.underlying_balance,
                redeemable_value=user_redeemable_value,
                cooldown_started_at=user_state.cooldown_started_at,
                cooldown_amount=user_state.cooldown_amount,
            )
        return StakedAssetView(snapshot=snapshot, position=position)
