from typing import Any

from dataclasses import dataclass
from enum import Enum


class ContractName(str, Enum):
    DATA_STORE = "DataStore"
    MARKET_STORE = "MarketStore"
    POSITION_STORE = "PositionStore"
    FUNDING_STORE = "FundingStore"
    FUNDING = "Funding"
    POOL_STORE = "PoolStore"
    RISK_STORE = "RiskStore"
    POOL = "Pool"
    POSITIONS = "Positions"


# Read-only functions each contract may be called with
CONTRACT_FUNCTIONS: dict[ContractName, frozenset[str]] = {
    ContractName.DATA_STORE: frozenset({"getAddress"}),
    ContractName.MARKET_STORE: frozenset({"getMarketList", "getMany", "get"}),
    ContractName.POSITION_STORE: frozenset({"getOILong", "getOIShort"}),
    ContractName.FUNDING_STORE: frozenset({"getLastCappedEmaFundingRate", "getLastUpdated"}),
    ContractName.FUNDING: frozenset({"getRealTimeFundingTracker", "getAccruedFundingV2"}),
    ContractName.POOL_STORE: frozenset({"getBalance"}),
    ContractName.RISK_STORE: frozenset({"getMaxPositionSize", "getMaxOI"}),
    ContractName.POOL: frozenset({"getGlobalUPL"}),
    ContractName.POSITIONS: frozenset({"getPnL"}),
}


@dataclass(frozen=True)
class ContractCall:
    """A read-only call of one function on one named contract."""

    contract: ContractName
    function: str
    args: tuple[Any, ...] = ()

    def __post_init__(self):
        allowed = CONTRACT_FUNCTIONS.get(self.contract, frozenset())
        if self.function not in allowed:
            raise ValueError(f"{self.contract.value} has no read function '{self.function}'")

    def __str__(self) -> str:
        return f"{self.contract.value}.{self.function}"
