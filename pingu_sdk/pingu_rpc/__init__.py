# Client
from pingu_sdk.pingu_rpc.client import PinguClient

# Config
from pingu_sdk.pingu_rpc.config import (
    DEFAULT_CONFIG,
    MONAD_CONFIG,
    AssetConfig,
    ChainConfig,
    ClientConfig,
    build_subgraph_url,
    get_chain_config,
    get_config,
    load_contract_abis,
)

# Constants
from pingu_sdk.pingu_rpc.consts import ADDRESS_ZERO, BPS_DIVIDER

# Core
from pingu_sdk.pingu_rpc.contracts import ContractHandleCache
from pingu_sdk.pingu_rpc.endpoints import Endpoint, EndpointPool
from pingu_sdk.pingu_rpc.fallback import FallbackExecutor

# Errors
from pingu_sdk.pingu_rpc.exceptions import (
    ConfigurationError,
    ContractResolutionError,
    EndpointsExhaustedError,
    InvalidChainIdError,
    PermanentCallError,
    PinguRpcError,
    QueryError,
    RemoteCallError,
    UnknownAssetError,
)

# Models
from pingu_sdk.pingu_rpc.models import MarketInfo, OIData, PnLData

# Reader
from pingu_sdk.pingu_rpc.reader import PinguReader

# Types
from pingu_sdk.pingu_rpc.types import ContractCall, ContractName

__all__ = [
    # Client
    "PinguClient",
    "PinguReader",
    # Config
    "DEFAULT_CONFIG",
    "MONAD_CONFIG",
    "AssetConfig",
    "ChainConfig",
    "ClientConfig",
    "build_subgraph_url",
    "get_chain_config",
    "get_config",
    "load_contract_abis",
    # Constants
    "ADDRESS_ZERO",
    "BPS_DIVIDER",
    # Core
    "ContractHandleCache",
    "Endpoint",
    "EndpointPool",
    "FallbackExecutor",
    # Errors
    "ConfigurationError",
    "ContractResolutionError",
    "EndpointsExhaustedError",
    "InvalidChainIdError",
    "PermanentCallError",
    "PinguRpcError",
    "QueryError",
    "RemoteCallError",
    "UnknownAssetError",
    # Models
    "MarketInfo",
    "OIData",
    "PnLData",
    # Types
    "ContractCall",
    "ContractName",
]
