"""
Call descriptors for every contract read the SDK performs.

Each function returns a `ContractCall` with its arguments in the order the
contract expects them; the executor decides which endpoint runs it.
"""

from collections.abc import Sequence

from pingu_sdk.pingu_rpc.types import ContractCall, ContractName


def get_address(key: str) -> ContractCall:
    return ContractCall(ContractName.DATA_STORE, "getAddress", (key,))


def get_market_list() -> ContractCall:
    return ContractCall(ContractName.MARKET_STORE, "getMarketList")


def get_market(market: str) -> ContractCall:
    return ContractCall(ContractName.MARKET_STORE, "get", (market,))


def get_many_markets(markets: Sequence[str]) -> ContractCall:
    return ContractCall(ContractName.MARKET_STORE, "getMany", (list(markets),))


def get_oi_long(asset_address: str, market: str) -> ContractCall:
    return ContractCall(ContractName.POSITION_STORE, "getOILong", (asset_address, market))


def get_oi_short(asset_address: str, market: str) -> ContractCall:
    return ContractCall(ContractName.POSITION_STORE, "getOIShort", (asset_address, market))


def get_last_capped_ema_funding_rate(asset_address: str, market: str) -> ContractCall:
    return ContractCall(ContractName.FUNDING_STORE, "getLastCappedEmaFundingRate", (asset_address, market))


def get_last_funding_update(asset_address: str, market: str) -> ContractCall:
    return ContractCall(ContractName.FUNDING_STORE, "getLastUpdated", (asset_address, market))


def get_real_time_funding_tracker(asset_address: str, market: str) -> ContractCall:
    return ContractCall(ContractName.FUNDING, "getRealTimeFundingTracker", (asset_address, market))


def get_accrued_funding(asset_address: str, market: str, intervals: int = 0) -> ContractCall:
    """Intervals of 0 lets the contract count them from the last update."""
    if intervals < 0:
        raise ValueError(f"intervals must be non-negative, got {intervals}")
    return ContractCall(ContractName.FUNDING, "getAccruedFundingV2", (asset_address, market, intervals))


def get_pool_balance(asset_address: str) -> ContractCall:
    return ContractCall(ContractName.POOL_STORE, "getBalance", (asset_address,))


def get_max_position_size(market: str, asset_address: str) -> ContractCall:
    return ContractCall(ContractName.RISK_STORE, "getMaxPositionSize", (market, asset_address))


def get_max_oi(market: str, asset_address: str) -> ContractCall:
    return ContractCall(ContractName.RISK_STORE, "getMaxOI", (market, asset_address))


def get_global_upl(asset_address: str) -> ContractCall:
    return ContractCall(ContractName.POOL, "getGlobalUPL", (asset_address,))


def get_pnl(
    asset_address: str,
    market: str,
    is_long: bool,
    current_price: int,
    position_price: int,
    size: int,
    funding_tracker: int,
) -> ContractCall:
    return ContractCall(
        ContractName.POSITIONS,
        "getPnL",
        (asset_address, market, is_long, current_price, position_price, size, funding_tracker),
    )
