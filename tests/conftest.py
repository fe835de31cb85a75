"""
Pytest fixtures for the Pingu SDK tests.

Clients are wired to an in-memory `FakeNetwork` instead of real RPC nodes, so
endpoint failures can be scripted per node and per contract function.
"""

from dataclasses import replace

import pytest
import pytest_asyncio

from pingu_sdk.pingu_rpc.client import PinguClient
from pingu_sdk.pingu_rpc.config import MONAD_CONFIG, ClientConfig
from pingu_sdk.pingu_rpc.reader import PinguReader
from tests.helpers import DATA_STORE_ADDRESS, FakeNetwork

DEFAULT_URLS = ("https://rpc-a.test", "https://rpc-b.test", "https://rpc-c.test")
TEST_TIMEOUT_SECONDS = 0.5


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture
def make_client(network: FakeNetwork):
    """Factory for clients on the fake network."""

    def _make(urls=DEFAULT_URLS, timeout: float = TEST_TIMEOUT_SECONDS, max_attempts=None) -> PinguClient:
        chain = replace(MONAD_CONFIG, rpc_urls=tuple(urls), data_store=DATA_STORE_ADDRESS)
        config = ClientConfig(chain=chain, timeout=timeout, max_attempts=max_attempts)
        return PinguClient(config, web3_factory=network.web3_factory)

    return _make


@pytest_asyncio.fixture
async def client(make_client):
    async with make_client() as pingu_client:
        yield pingu_client


@pytest.fixture
def reader(client: PinguClient) -> PinguReader:
    return PinguReader(client)
