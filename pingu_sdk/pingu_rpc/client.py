"""
Pingu RPC Client - entry point for reading on-chain protocol state.

The client wires the endpoint pool, the contract handle cache and the
fallback executor together for one chain configuration.
"""

from typing import Any, Optional, Union

import logging

from pingu_sdk._version import SDK_VERSION
from pingu_sdk.pingu_rpc.config import ClientConfig, get_config
from pingu_sdk.pingu_rpc.contracts import ContractHandleCache
from pingu_sdk.pingu_rpc.endpoints import EndpointPool, Web3Factory, create_web3
from pingu_sdk.pingu_rpc.fallback import FallbackExecutor
from pingu_sdk.pingu_rpc.types import ContractCall, ContractName


class PinguClient:
    """
    Client for contract reads on the chain the Pingu protocol is deployed on.

    Use as an async context manager, or call `close()` when done, to release
    the HTTP sessions of the endpoints.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        web3_factory: Web3Factory = create_web3,
        abis: Optional[dict] = None,
    ):
        """
        Initialize the Pingu RPC client.

        Args:
            config: Optional client configuration, loaded from environment variables if not provided
            web3_factory: Creates the Web3 connection of an endpoint from its URL and timeout
            abis: Optional contract ABIs keyed by contract name, the bundled ABIs are used if not provided
        """
        self.logger = logging.getLogger("pingu.rpc.client")

        self._config = config or get_config()
        chain = self._config.chain

        self._pool = EndpointPool(chain.rpc_urls, timeout=self._config.timeout, web3_factory=web3_factory)
        self._contracts = ContractHandleCache(self._pool, chain.data_store, abis)
        self._executor = FallbackExecutor(
            self._pool,
            self._contracts,
            timeout=self._config.timeout,
            max_attempts=self._config.max_attempts,
        )

        self.logger.info(
            f"pingu-python-sdk/{SDK_VERSION} on {chain.name} ({chain.chain_id}) "
            f"with {self._pool.size} RPC endpoints, up to {self._executor.max_attempts} attempts per call"
        )

    async def __aenter__(self) -> "PinguClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def config(self) -> ClientConfig:
        """Get the current configuration."""
        return self._config

    @property
    def pool(self) -> EndpointPool:
        return self._pool

    @property
    def executor(self) -> FallbackExecutor:
        return self._executor

    async def get_contract(self, name: Union[ContractName, str]) -> Any:
        """Get the contract handle for a named contract on the current endpoint."""
        return await self._contracts.get_handle(name)

    async def with_fallback(self, call: ContractCall) -> Any:
        """Execute a contract read, falling back to other endpoints on transient failures."""
        return await self._executor.execute(call)

    def endpoint_stats(self) -> dict[str, dict]:
        return self._pool.stats()

    async def close(self) -> None:
        await self._contracts.close()
        await self._pool.close()
