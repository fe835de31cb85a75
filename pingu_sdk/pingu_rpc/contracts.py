"""
Contract handle cache.

Contract addresses are looked up on the DataStore registry of the chain and
turned into `AsyncContract` handles bound to one endpoint's connection.
Handles are cached per (contract, endpoint) and dropped as soon as the
endpoint pool has rotated. Concurrent lookups of the same handle share one
in-flight resolution; lookups of different handles never wait on each other.
"""

from typing import Any, Optional, Union

import asyncio
import logging

from web3 import Web3

from pingu_sdk.pingu_rpc.config import load_contract_abis
from pingu_sdk.pingu_rpc.consts import ADDRESS_ZERO
from pingu_sdk.pingu_rpc.endpoints import Endpoint, EndpointPool
from pingu_sdk.pingu_rpc.exceptions import ContractResolutionError
from pingu_sdk.pingu_rpc.types import ContractName

logger = logging.getLogger("pingu.rpc.contracts")

HandleKey = tuple[ContractName, str]


class ContractHandleCache:
    """Resolves and memoizes contract handles for the pool's active endpoint."""

    def __init__(self, pool: EndpointPool, data_store_address: str, abis: Optional[dict] = None):
        self._pool = pool
        self._data_store_address = Web3.to_checksum_address(data_store_address)
        self._abis = abis if abis is not None else load_contract_abis()
        self._handles: dict[HandleKey, Any] = {}
        self._resolving: dict[HandleKey, asyncio.Task] = {}
        self._generation = pool.generation

    def __len__(self) -> int:
        return len(self._handles)

    def _drop_stale_handles(self) -> None:
        generation = self._pool.generation
        if generation != self._generation:
            if self._handles:
                logger.debug(f"Endpoint rotated, dropping {len(self._handles)} cached contract handles")
            self._handles.clear()
            self._generation = generation

    async def get_handle(self, name: Union[ContractName, str], endpoint: Optional[Endpoint] = None) -> Any:
        """
        Get a contract handle bound to an endpoint.

        Args:
            name: Contract name as registered in the DataStore
            endpoint: Endpoint to bind to, defaults to the pool's current endpoint

        Returns:
            AsyncContract handle

        Raises:
            ContractResolutionError: If the contract is unknown or not registered
        """
        try:
            contract_name = ContractName(name)
        except ValueError:
            raise ContractResolutionError(f"Unknown contract '{name}'")
        if contract_name.value not in self._abis:
            raise ContractResolutionError(f"No ABI available for contract '{contract_name.value}'")

        if endpoint is None:
            endpoint = self._pool.current_endpoint()

        # No await between the cache check and registering the resolution
        self._drop_stale_handles()
        key = (contract_name, endpoint.url)
        handle = self._handles.get(key)
        if handle is not None:
            return handle

        resolving = self._resolving.get(key)
        if resolving is None:
            resolving = asyncio.ensure_future(self._resolve_and_store(key, contract_name, endpoint))
            self._resolving[key] = resolving
            resolving.add_done_callback(lambda task: self._resolution_done(key, task))

        # A caller that times out must not cancel a resolution other callers wait on
        return await asyncio.shield(resolving)

    def _resolution_done(self, key: HandleKey, task: asyncio.Task) -> None:
        if self._resolving.get(key) is task:
            del self._resolving[key]
        # Mark the error retrieved when every waiter has gone
        if not task.cancelled():
            task.exception()

    async def _resolve_and_store(self, key: HandleKey, name: ContractName, endpoint: Endpoint) -> Any:
        generation = self._generation
        handle = await self._resolve(name, endpoint)
        if generation == self._generation == self._pool.generation:
            self._handles[key] = handle
        return handle

    async def close(self) -> None:
        """Cancel in-flight resolutions and forget every handle."""
        pending = list(self._resolving.values())
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._handles.clear()

    def _data_store(self, endpoint: Endpoint) -> Any:
        key = (ContractName.DATA_STORE, endpoint.url)
        handle = self._handles.get(key)
        if handle is None:
            w3 = self._pool.connection(endpoint)
            handle = w3.eth.contract(address=self._data_store_address, abi=self._abis[ContractName.DATA_STORE.value])
            self._handles[key] = handle
        return handle

    async def _resolve(self, name: ContractName, endpoint: Endpoint) -> Any:
        data_store = self._data_store(endpoint)
        if name == ContractName.DATA_STORE:
            return data_store

        address = await data_store.functions.getAddress(name.value).call()
        if not address or address.lower() == ADDRESS_ZERO:
            raise ContractResolutionError(f"Contract '{name.value}' is not registered in the DataStore")

        logger.debug(f"Resolved {name.value} to {address} on {endpoint.url}")
        w3 = self._pool.connection(endpoint)
        return w3.eth.contract(address=Web3.to_checksum_address(address), abi=self._abis[name.value])
