"""Gathering configuration from environment variables and ABIs"""

from typing import Callable, Optional, TypeVar

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from dotenv import load_dotenv

from pingu_sdk.pingu_rpc.consts import (
    ADDRESS_ZERO,
    DEFAULT_RPC_TIMEOUT,
    MONAD_CHAIN_ID,
    MONAD_RPC_URLS,
    MONAD_SUBGRAPH_ID,
    SUBGRAPH_GATEWAY_HOST,
)
from pingu_sdk.pingu_rpc.exceptions import ConfigurationError, InvalidChainIdError


Number = TypeVar("Number", int, float)


def _env_number(name: str, parse: Callable[[str], Number], default: Optional[Number]) -> Optional[Number]:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return parse(value.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


@dataclass(frozen=True)
class AssetConfig:
    """On-chain address and precision of a collateral asset."""

    address: str
    decimals: int
    min_size: float
    is_gas_token: bool = False

    def __post_init__(self):
        if self.decimals < 0:
            raise ConfigurationError(f"Asset decimals must be non-negative, got {self.decimals}")
        if self.is_gas_token and self.address != ADDRESS_ZERO:
            raise ConfigurationError("Gas token assets must use the zero address")


@dataclass(frozen=True)
class ChainConfig:
    """Static description of the chain the protocol is deployed on."""

    chain_id: int
    name: str
    rpc_urls: tuple[str, ...]
    data_store: str
    subgraph_id: str
    explorer: str
    assets: Mapping[str, AssetConfig] = field(default_factory=dict)

    def __post_init__(self):
        if not self.rpc_urls:
            raise ConfigurationError(f"No RPC endpoints configured for chain {self.chain_id}")
        object.__setattr__(self, "assets", MappingProxyType(dict(self.assets)))


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the Pingu RPC client."""

    chain: ChainConfig
    timeout: float = DEFAULT_RPC_TIMEOUT
    max_attempts: Optional[int] = None  # defaults to one attempt per endpoint
    subgraph_api_key: Optional[str] = None

    @property
    def subgraph_url(self) -> Optional[str]:
        """The subgraph gateway URL, when an API key is configured"""
        if not self.subgraph_api_key:
            return None
        return build_subgraph_url(self.subgraph_api_key, self.chain.subgraph_id)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create a config instance from environment variables."""
        load_dotenv()

        chain = get_chain_config(_env_number("CHAIN_ID", int, MONAD_CHAIN_ID))

        # Comma separated list, replaces the built-in endpoints in the given order
        rpc_urls = os.environ.get("PINGU_RPC_URLS")
        if rpc_urls:
            urls = tuple(url.strip() for url in rpc_urls.split(",") if url.strip())
            chain = replace(chain, rpc_urls=urls)

        timeout = _env_number("PINGU_RPC_TIMEOUT", float, DEFAULT_RPC_TIMEOUT)
        if timeout <= 0:
            raise ConfigurationError(f"PINGU_RPC_TIMEOUT must be positive, got {timeout}")

        max_attempts = _env_number("PINGU_RPC_MAX_ATTEMPTS", int, None)

        return cls(
            chain=chain,
            timeout=timeout,
            max_attempts=max_attempts,
            subgraph_api_key=os.environ.get("SUBGRAPH_API_KEY") or None,
        )


MONAD_CONFIG = ChainConfig(
    chain_id=MONAD_CHAIN_ID,
    name="Monad",
    rpc_urls=tuple(MONAD_RPC_URLS),
    data_store="0x631c6E0d5ae2E1F6a39871a9BE97F1D9d43D1C83",
    subgraph_id=MONAD_SUBGRAPH_ID,
    explorer="https://monadvision.com/",
    assets={
        "USDC": AssetConfig(
            address="0x754704bc059f8c67012fed69bc8a327a5aafb603",
            decimals=6,
            min_size=100,
        ),
        "MON": AssetConfig(
            address=ADDRESS_ZERO,
            decimals=18,
            min_size=5000,
            is_gas_token=True,
        ),
    },
)

DEFAULT_CONFIG = MONAD_CONFIG


def get_chain_config(chain_id: int) -> ChainConfig:
    """Get the static chain configuration for a chain id."""
    if chain_id == MONAD_CHAIN_ID:
        return MONAD_CONFIG
    raise InvalidChainIdError(f"Invalid chain id! Only {MONAD_CHAIN_ID} (Monad) is supported, got {chain_id}.")


def build_subgraph_url(api_key: str, subgraph_id: str) -> str:
    """Build The Graph gateway endpoint URL with API key"""
    return f"https://{SUBGRAPH_GATEWAY_HOST}/api/{api_key}/subgraphs/id/{subgraph_id}"


def load_contract_abis() -> dict:
    """Load all contract ABIs from files, keyed by contract name."""
    # Get the directory where this file is located
    current_dir = os.path.dirname(os.path.abspath(__file__))
    abis_dir = os.path.join(current_dir, "abis")

    abis = {}
    for file_name in sorted(os.listdir(abis_dir)):
        if not file_name.endswith(".json"):
            continue
        with open(os.path.join(abis_dir, file_name), encoding="utf-8") as f:
            abis[file_name[: -len(".json")]] = json.load(f)

    return abis


def get_config() -> ClientConfig:
    """Get configuration from environment."""
    return ClientConfig.from_env()
