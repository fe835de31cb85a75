"""Value objects returned by the Pingu reader."""

from __future__ import annotations

from typing import Any

from collections.abc import Sequence
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from pingu_sdk.pingu_rpc.utils.converters import bps_to_decimal

# Field order of the MarketStore.Market struct
RAW_MARKET_FIELDS = (
    "name",
    "category",
    "chainlink_feed",
    "max_leverage",
    "max_deviation",
    "fee",
    "liq_threshold",
    "funding_factor",
    "min_order_age",
    "pyth_max_age",
    "pyth_feed",
    "allow_chainlink_execution",
    "is_reduce_only",
    "min_factor",
    "sample_size",
)


def _to_hex(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


class MarketInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    market: str = Field(description="Market identifier (e.g., ETH-USD)")
    name: str
    category: str
    chainlink_feed: str
    max_leverage: int
    max_deviation: int = Field(description="Max oracle price deviation, in bps")
    fee: int = Field(description="Trading fee, in bps")
    liq_threshold: int = Field(description="Liquidation threshold, in bps")
    funding_factor: int = Field(description="Yearly funding rate when OI is fully skewed, in bps")
    min_order_age: int = Field(description="Seconds")
    pyth_max_age: int = Field(description="Seconds")
    pyth_feed: str
    allow_chainlink_execution: bool
    is_reduce_only: bool
    min_factor: int
    sample_size: int

    @property
    def fee_rate(self) -> Decimal:
        """Trading fee as a fraction of the position size"""
        return bps_to_decimal(self.fee)

    @property
    def liq_threshold_rate(self) -> Decimal:
        return bps_to_decimal(self.liq_threshold)

    @classmethod
    def from_raw(cls, market: str, raw: Sequence[Any]) -> MarketInfo:
        """Build from the tuple returned by MarketStore.get / getMany."""
        if len(raw) != len(RAW_MARKET_FIELDS):
            raise ValueError(f"Expected {len(RAW_MARKET_FIELDS)} market fields for {market}, got {len(raw)}")

        data = dict(zip(RAW_MARKET_FIELDS, raw))
        data["pyth_feed"] = _to_hex(data["pyth_feed"])
        data["chainlink_feed"] = str(data["chainlink_feed"])
        return cls(market=market, **data)


class OIData(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: float
    long: float
    short: float

    @classmethod
    def from_sides(cls, long: float, short: float) -> OIData:
        return cls(total=long + short, long=long, short=short)


class PnLData(BaseModel):
    """P&L of a position in asset units; `pnl` is net of `funding_fee`."""

    model_config = ConfigDict(frozen=True)

    pnl: float
    funding_fee: float
