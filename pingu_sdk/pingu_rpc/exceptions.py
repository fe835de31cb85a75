"""Custom exceptions for the Pingu RPC SDK."""

from typing import Optional


class PinguRpcError(Exception):
    """Base exception for Pingu RPC operations."""


class InvalidChainIdError(PinguRpcError):
    """Raised when an invalid chain ID is provided."""


class ConfigurationError(PinguRpcError):
    """Raised when chain or client configuration is missing or invalid."""


class UnknownAssetError(PinguRpcError):
    """Raised when an asset symbol has no entry in the chain's asset registry."""


class ContractResolutionError(PinguRpcError):
    """Raised when a named contract cannot be resolved to a deployed address."""


class RemoteCallError(PinguRpcError):
    """Base class for failures of a remote contract call."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class PermanentCallError(RemoteCallError):
    """Raised when a call fails for a reason that no endpoint rotation can fix."""


class EndpointsExhaustedError(RemoteCallError):
    """Raised when every configured endpoint was tried and none succeeded."""

    def __init__(self, message: str, attempts: int, cause: Optional[BaseException] = None):
        super().__init__(message, cause)
        self.attempts = attempts


class QueryError(PinguRpcError):
    """Raised by reader methods; the message is `Failed to <operation>: <cause>`."""

    def __init__(self, operation: str, cause: str):
        super().__init__(f"Failed to {operation}: {cause}")
        self.operation = operation
        self.cause = cause
