"""
Pingu SDK - Python SDK for reading the state of the Pingu perpetuals protocol.

This package provides:
- pingu_rpc: For reading on-chain protocol state through a pool of RPC endpoints
"""

from pingu_sdk._version import SDK_VERSION
from pingu_sdk.pingu_rpc import (
    ClientConfig,
    PinguClient,
    PinguReader,
    build_subgraph_url,
    get_config,
)

__all__ = [
    "SDK_VERSION",
    "ClientConfig",
    "PinguClient",
    "PinguReader",
    "build_subgraph_url",
    "get_config",
]
