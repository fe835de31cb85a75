"""
Fallback executor for contract reads.

A call is attempted on the pool's current endpoint. Transient failures rotate
the pool and retry on the next endpoint, one attempt per configured endpoint
at most. Permanent failures are raised immediately without rotating.
"""

from typing import Any, Optional

import asyncio
import logging
from collections.abc import Sequence

from pingu_sdk.pingu_rpc.consts import DEFAULT_RPC_TIMEOUT
from pingu_sdk.pingu_rpc.contracts import ContractHandleCache
from pingu_sdk.pingu_rpc.endpoints import Endpoint, EndpointPool
from pingu_sdk.pingu_rpc.exceptions import EndpointsExhaustedError, PermanentCallError
from pingu_sdk.pingu_rpc.types import ContractCall
from pingu_sdk.pingu_rpc.utils.errors import ClassifiedError, classify

logger = logging.getLogger("pingu.rpc.fallback")


class FallbackExecutor:
    """Runs contract calls against the endpoint pool with rotation on transient failures."""

    def __init__(
        self,
        pool: EndpointPool,
        contracts: ContractHandleCache,
        timeout: float = DEFAULT_RPC_TIMEOUT,
        max_attempts: Optional[int] = None,
    ):
        self._pool = pool
        self._contracts = contracts
        self._timeout = timeout
        self._max_attempts = pool.size if max_attempts is None else max(1, min(max_attempts, pool.size))

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def _attempt(self, call: ContractCall, endpoint: Endpoint) -> Any:
        handle = await self._contracts.get_handle(call.contract, endpoint)
        function = getattr(handle.functions, call.function)
        return await function(*call.args).call()

    async def execute(self, call: ContractCall) -> Any:
        """
        Execute a contract read with endpoint fallback.

        Args:
            call: The contract function and arguments to call

        Returns:
            The raw decoded result of the call

        Raises:
            PermanentCallError: If the call failed for a non-retryable reason
            EndpointsExhaustedError: If every attempt failed with a transient error
        """
        errors: list[ClassifiedError] = []

        for attempt in range(1, self._max_attempts + 1):
            endpoint = self._pool.current_endpoint()
            logger.debug(f"Calling {call} on {endpoint.url} (attempt {attempt}/{self._max_attempts})")

            try:
                result = await asyncio.wait_for(self._attempt(call, endpoint), timeout=self._timeout)
            except Exception as e:
                classified = classify(e)
                if not classified.is_transient:
                    logger.debug(f"{call} failed permanently on {endpoint.url}: {classified.message}")
                    raise PermanentCallError(classified.message, cause=e) from e

                errors.append(classified)
                logger.warning(
                    f"{call} failed on {endpoint.url} (attempt {attempt}/{self._max_attempts}): {classified.message}"
                )
                self._pool.rotate(failed=endpoint, error=classified.message)
                continue

            self._pool.mark_healthy(endpoint)
            return result

        last_error = errors[-1]
        raise EndpointsExhaustedError(
            f"All {len(errors)} RPC endpoints exhausted calling {call}; last error: {last_error.message}",
            attempts=len(errors),
            cause=last_error.error,
        ) from last_error.error

    async def execute_many(self, calls: Sequence[ContractCall]) -> list[Any]:
        """Execute independent calls concurrently; results are in the order of `calls`."""
        return list(await asyncio.gather(*(self.execute(call) for call in calls)))
