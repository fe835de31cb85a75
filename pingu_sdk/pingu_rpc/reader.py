"""
Reader for Pingu protocol state.

Every method reads one logical value through the client's fallback executor
and converts the scaled on-chain integers with the asset's precision. Any
failure is raised as `QueryError` with a `Failed to <operation>: ` prefix.
"""

from typing import Iterator

import asyncio
import logging
from contextlib import contextmanager
from decimal import Decimal

from pingu_sdk.pingu_rpc import calls
from pingu_sdk.pingu_rpc.client import PinguClient
from pingu_sdk.pingu_rpc.config import AssetConfig
from pingu_sdk.pingu_rpc.consts import (
    BPS_DIVIDER,
    DAYS_PER_YEAR,
    DEFAULT_ASSET,
    DEFAULT_PRICE_DECIMALS,
    FUNDING_UPDATES_PER_DAY,
)
from pingu_sdk.pingu_rpc.exceptions import QueryError
from pingu_sdk.pingu_rpc.models import MarketInfo, OIData, PnLData
from pingu_sdk.pingu_rpc.utils.assets import get_asset
from pingu_sdk.pingu_rpc.utils.converters import from_scaled
from pingu_sdk.pingu_rpc.utils.errors import parse_contract_error

logger = logging.getLogger("pingu.rpc.reader")


@contextmanager
def _query(operation: str) -> Iterator[None]:
    try:
        yield
    except Exception as e:
        cause = parse_contract_error(e)
        logger.debug(f"Failed to {operation}: {cause}")
        raise QueryError(operation, cause) from e


class PinguReader:
    """Read-only access to markets, open interest, funding, pool and risk state."""

    def __init__(self, client: PinguClient):
        self.client = client

    def _asset(self, asset: str) -> AssetConfig:
        return get_asset(asset, self.client.config.chain.assets)

    async def get_markets(self) -> list[MarketInfo]:
        with _query("get markets"):
            market_list = await self.client.with_fallback(calls.get_market_list())
            if not market_list:
                return []
            raw_infos = await self.client.with_fallback(calls.get_many_markets(market_list))
            if len(raw_infos) != len(market_list):
                raise ValueError(f"MarketStore returned {len(raw_infos)} markets for {len(market_list)} ids")
            return [MarketInfo.from_raw(market, raw) for market, raw in zip(market_list, raw_infos)]

    async def get_market_info(self, market: str) -> MarketInfo:
        with _query("get market info"):
            raw_info = await self.client.with_fallback(calls.get_market(market))
            return MarketInfo.from_raw(market, raw_info)

    async def get_open_interest(self, market: str, asset: str = DEFAULT_ASSET) -> OIData:
        """
        Get open interest for a market.

        Only OI long and OI short are fetched, concurrently; the total is
        computed client side.
        """
        with _query("get open interest"):
            asset_config = self._asset(asset)
            oi_long, oi_short = await asyncio.gather(
                self.client.with_fallback(calls.get_oi_long(asset_config.address, market)),
                self.client.with_fallback(calls.get_oi_short(asset_config.address, market)),
            )
            return OIData.from_sides(
                long=from_scaled(oi_long, asset_config.decimals),
                short=from_scaled(oi_short, asset_config.decimals),
            )

    async def get_funding_rate(self, market: str, asset: str = DEFAULT_ASSET) -> float:
        """
        Get the last capped EMA funding rate (updated every 8h).

        Returns:
            The funding rate as a percentage per 8-hour period
        """
        with _query("get funding rate"):
            asset_config = self._asset(asset)
            result = await self.client.with_fallback(
                calls.get_last_capped_ema_funding_rate(asset_config.address, market)
            )
            yearly_bps = from_scaled(result, DEFAULT_PRICE_DECIMALS, as_decimal=True)
            rate = yearly_bps / Decimal(BPS_DIVIDER) / Decimal(DAYS_PER_YEAR * FUNDING_UPDATES_PER_DAY) * 100
            return float(rate)

    async def get_real_time_funding_tracker(self, market: str, asset: str = DEFAULT_ASSET) -> int:
        """
        Get the real-time funding tracker, interpolated between on-chain updates.

        The tracker is returned unscaled (UNIT x bps) so it can be passed back
        to `get_pnl` as a position's funding snapshot.
        """
        with _query("get real-time funding tracker"):
            asset_config = self._asset(asset)
            return int(
                await self.client.with_fallback(calls.get_real_time_funding_tracker(asset_config.address, market))
            )

    async def get_accrued_funding(self, market: str, asset: str = DEFAULT_ASSET, intervals: int = 0) -> int:
        """
        Get accrued funding for a market using the EMA-based calculation.

        Positive values mean longs pay shorts. The value is in UNIT x bps scale.

        Args:
            market: Market identifier (e.g. "ETH-USD")
            asset: Asset name
            intervals: Number of intervals to compute over, 0 counts them from the last update
        """
        with _query("get accrued funding"):
            asset_config = self._asset(asset)
            result = await self.client.with_fallback(
                calls.get_accrued_funding(asset_config.address, market, intervals)
            )
            # First value is the funding tracker increment
            return int(result[0])

    async def get_last_funding_update(self, market: str, asset: str = DEFAULT_ASSET) -> int:
        """Get the timestamp (seconds) of the last funding update"""
        with _query("get last funding update"):
            asset_config = self._asset(asset)
            return int(await self.client.with_fallback(calls.get_last_funding_update(asset_config.address, market)))

    async def get_pool_balance(self, asset: str = DEFAULT_ASSET) -> float:
        with _query("get pool balance"):
            asset_config = self._asset(asset)
            balance = await self.client.with_fallback(calls.get_pool_balance(asset_config.address))
            return from_scaled(balance, asset_config.decimals)

    async def get_max_position_size(self, market: str, asset: str = DEFAULT_ASSET) -> float:
        with _query("get max position size"):
            asset_config = self._asset(asset)
            max_size = await self.client.with_fallback(calls.get_max_position_size(market, asset_config.address))
            return from_scaled(max_size, asset_config.decimals)

    async def get_max_oi(self, market: str, asset: str = DEFAULT_ASSET) -> float:
        with _query("get max OI"):
            asset_config = self._asset(asset)
            max_oi = await self.client.with_fallback(calls.get_max_oi(market, asset_config.address))
            return from_scaled(max_oi, asset_config.decimals)

    async def get_global_upl(self, asset: str = DEFAULT_ASSET) -> float:
        """
        Get global unrealized profit/loss for an asset.

        Set by a whitelisted keeper, it is the total unrealized P&L of all open
        positions in the asset; positive means net unrealized profit for traders.
        """
        with _query("get global UPL"):
            asset_config = self._asset(asset)
            upl = await self.client.with_fallback(calls.get_global_upl(asset_config.address))
            return from_scaled(upl, asset_config.decimals)

    async def get_pnl(
        self,
        market: str,
        is_long: bool,
        current_price: int,
        position_price: int,
        size: int,
        funding_tracker: int,
        asset: str = DEFAULT_ASSET,
    ) -> PnLData:
        """
        Compute profit & loss for a position on-chain via Positions.getPnL.

        Args:
            market: Market identifier (e.g. "ETH-USD")
            is_long: Whether the position is long
            current_price: Current market price (scaled by 10^18)
            position_price: Position average entry price (scaled by 10^18)
            size: Position size (scaled by the asset decimals)
            funding_tracker: Position's funding tracker snapshot
            asset: Asset name

        Returns:
            PnLData with net P&L and the funding fee component, in asset units
        """
        with _query("get PnL"):
            asset_config = self._asset(asset)
            pnl, funding_fee = await self.client.with_fallback(
                calls.get_pnl(
                    asset_config.address,
                    market,
                    is_long,
                    current_price,
                    position_price,
                    size,
                    funding_tracker,
                )
            )
            return PnLData(
                pnl=from_scaled(pnl, asset_config.decimals),
                funding_fee=from_scaled(funding_fee, asset_config.decimals),
            )

    def get_min_size(self, asset: str = DEFAULT_ASSET) -> float:
        """Minimum tradable size of an asset, from the chain configuration"""
        with _query("get min size"):
            return float(self._asset(asset).min_size)
