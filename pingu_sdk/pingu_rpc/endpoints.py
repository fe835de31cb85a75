"""
Ordered pool of RPC endpoints for the configured chain.

The pool owns the "current endpoint" shared by every query of a client.
Rotation is round-robin over the full configured list; an endpoint that
failed is only marked as failing, never removed, so it is tried again on the
next cycle.
"""

from typing import Callable, Optional

import logging
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3

from pingu_sdk.pingu_rpc.consts import DEFAULT_RPC_TIMEOUT
from pingu_sdk.pingu_rpc.exceptions import ConfigurationError

logger = logging.getLogger("pingu.rpc.endpoints")

Web3Factory = Callable[[str, float], AsyncWeb3]


def create_web3(url: str, timeout: float) -> AsyncWeb3:
    """
    Create an async Web3 connection to one endpoint.

    The provider's own retries are disabled: one attempt sends exactly one
    request, and retrying is left to the fallback executor on another endpoint.
    """
    provider = AsyncHTTPProvider(
        url,
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)},
        exception_retry_configuration=None,
    )
    return AsyncWeb3(provider)


@dataclass(eq=False)
class Endpoint:
    """An RPC endpoint and its observed health."""

    url: str
    healthy: bool = True
    total_requests: int = 0
    failed_requests: int = 0
    last_error: Optional[str] = None
    last_success_ts: Optional[int] = None
    _web3: Optional[AsyncWeb3] = field(default=None, repr=False)

    def __str__(self) -> str:
        return self.url


class EndpointPool:
    """Round-robin pool of RPC endpoints with a shared current selection."""

    def __init__(
        self,
        urls: Sequence[str],
        timeout: float = DEFAULT_RPC_TIMEOUT,
        web3_factory: Web3Factory = create_web3,
    ):
        if not urls:
            raise ConfigurationError("No RPC endpoints configured")

        self._endpoints = [Endpoint(url=url) for url in urls]
        self._timeout = timeout
        self._web3_factory = web3_factory
        self._index = 0
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def endpoints(self) -> list[Endpoint]:
        return list(self._endpoints)

    @property
    def size(self) -> int:
        return len(self._endpoints)

    @property
    def generation(self) -> int:
        """Incremented on every rotation; contract handles from older generations are stale."""
        return self._generation

    def current_endpoint(self) -> Endpoint:
        with self._lock:
            return self._endpoints[self._index]

    def rotate(self, failed: Optional[Endpoint] = None, error: Optional[str] = None) -> Endpoint:
        """
        Mark an endpoint as failing and move on to the next one.

        If `failed` is given and is no longer the current endpoint, another
        query already rotated away from it: the endpoint is marked as failing
        but the current selection is left alone.

        Args:
            failed: The endpoint the caller saw failing, defaults to the current one
            error: Description of the failure, kept for stats

        Returns:
            The endpoint selected after rotation
        """
        with self._lock:
            current = self._endpoints[self._index]
            target = failed if failed is not None else current

            target.healthy = False
            target.total_requests += 1
            target.failed_requests += 1
            target.last_error = error

            if target is current:
                self._index = (self._index + 1) % len(self._endpoints)
                self._generation += 1
                logger.warning(f"Rotated RPC endpoint {current.url} -> {self._endpoints[self._index].url}: {error}")

            return self._endpoints[self._index]

    def mark_healthy(self, endpoint: Endpoint) -> None:
        with self._lock:
            if not endpoint.healthy:
                logger.info(f"RPC endpoint {endpoint.url} is healthy again")
            endpoint.healthy = True
            endpoint.total_requests += 1
            endpoint.last_success_ts = int(time.time() * 1000)

    def connection(self, endpoint: Endpoint) -> AsyncWeb3:
        """Get or create the Web3 connection for an endpoint."""
        with self._lock:
            if endpoint._web3 is None:
                endpoint._web3 = self._web3_factory(endpoint.url, self._timeout)
            return endpoint._web3

    async def close(self) -> None:
        """Close the HTTP sessions of every endpoint that was connected."""
        for endpoint in self._endpoints:
            w3 = endpoint._web3
            endpoint._web3 = None
            if w3 is None:
                continue
            disconnect = getattr(w3.provider, "disconnect", None)
            if disconnect is not None:
                await disconnect()

    def stats(self) -> dict[str, dict]:
        """Get a health summary for all endpoints."""
        return {
            endpoint.url: {
                "healthy": endpoint.healthy,
                "total_requests": endpoint.total_requests,
                "failed_requests": endpoint.failed_requests,
                "last_error": endpoint.last_error,
                "last_success_ts": endpoint.last_success_ts,
            }
            for endpoint in self._endpoints
        }
