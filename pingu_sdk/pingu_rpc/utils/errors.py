"""
Classification of failed remote calls.

`classify` maps any error raised while talking to a node to a stable message
and a transient/permanent kind. The fallback executor decides whether to
rotate endpoints purely from the returned `ClassifiedError`.
"""

from typing import Any, Optional

import asyncio
import json
from dataclasses import dataclass
from enum import Enum

import aiohttp
from web3.exceptions import (
    BadFunctionCallOutput,
    BadResponseFormat,
    ContractLogicError,
    MismatchedABI,
    ProviderConnectionError,
    Web3RPCError,
    Web3ValidationError,
)

from pingu_sdk.pingu_rpc.exceptions import (
    ConfigurationError,
    ContractResolutionError,
    EndpointsExhaustedError,
    PermanentCallError,
    QueryError,
    UnknownAssetError,
)

RATE_LIMIT_CODES = {429, -32005}
RATE_LIMIT_MARKERS = ("rate limit", "rate-limit", "too many requests", "request limit", "exceeded the limit")
REVERT_MARKERS = ("execution reverted", "revert")


class ErrorKind(str, Enum):
    TRANSIENT = "transient"
    PERMANENT = "permanent"


@dataclass(frozen=True)
class ClassifiedError:
    """An error from a remote call together with its retry classification."""

    kind: ErrorKind
    message: str
    error: BaseException

    @property
    def is_transient(self) -> bool:
        return self.kind == ErrorKind.TRANSIENT


def _error_text(error: BaseException) -> str:
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def _rpc_error_payload(error: Web3RPCError) -> dict[str, Any]:
    rpc_response = getattr(error, "rpc_response", None) or {}
    payload = rpc_response.get("error") if isinstance(rpc_response, dict) else None
    return payload if isinstance(payload, dict) else {}


def _revert_reason(error: BaseException) -> Optional[str]:
    if isinstance(error, ContractLogicError):
        return _error_text(error) or "execution reverted"
    if isinstance(error, Web3RPCError):
        text = _error_text(error)
        if any(marker in text.lower() for marker in REVERT_MARKERS):
            return text
    return None


def _is_rate_limited(error: BaseException) -> bool:
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status == 429
    if isinstance(error, Web3RPCError):
        if _rpc_error_payload(error).get("code") in RATE_LIMIT_CODES:
            return True
    text = _error_text(error).lower()
    return any(marker in text for marker in RATE_LIMIT_MARKERS)


def classify(error: BaseException) -> ClassifiedError:
    """
    Classify an error raised by a remote call.

    Checked in priority order:
        1. decoded contract reverts and request errors (permanent)
        2. network failures: timeouts, refused or reset connections, DNS (transient)
        3. rate limiting (transient)
        4. malformed or empty responses (transient)
        5. anything else (transient)

    Args:
        error: The exception raised by the call

    Returns:
        ClassifiedError with a human readable message
    """
    revert_reason = _revert_reason(error)
    if revert_reason is not None:
        return ClassifiedError(ErrorKind.PERMANENT, revert_reason, error)

    if isinstance(error, (PermanentCallError, ContractResolutionError, UnknownAssetError, ConfigurationError)):
        return ClassifiedError(ErrorKind.PERMANENT, _error_text(error), error)
    if isinstance(error, (Web3ValidationError, MismatchedABI, TypeError)):
        return ClassifiedError(ErrorKind.PERMANENT, f"Invalid call arguments: {_error_text(error)}", error)
    if isinstance(error, QueryError):
        return ClassifiedError(ErrorKind.PERMANENT, error.cause, error)
    if isinstance(error, EndpointsExhaustedError):
        return ClassifiedError(ErrorKind.TRANSIENT, error.message, error)

    if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        return ClassifiedError(ErrorKind.TRANSIENT, "Request timed out", error)

    if isinstance(error, (aiohttp.ClientConnectionError, ProviderConnectionError, ConnectionError, OSError)):
        return ClassifiedError(ErrorKind.TRANSIENT, f"Network error: {_error_text(error) or type(error).__name__}", error)

    if _is_rate_limited(error):
        return ClassifiedError(ErrorKind.TRANSIENT, f"Rate limited: {_error_text(error)}", error)

    # ContentTypeError is a ClientResponseError, check it first
    if isinstance(error, (BadFunctionCallOutput, BadResponseFormat, json.JSONDecodeError, aiohttp.ContentTypeError)):
        return ClassifiedError(ErrorKind.TRANSIENT, f"Malformed response: {_error_text(error)}", error)

    if isinstance(error, aiohttp.ClientResponseError):
        return ClassifiedError(ErrorKind.TRANSIENT, f"HTTP {error.status}: {error.message}", error)

    return ClassifiedError(ErrorKind.TRANSIENT, _error_text(error) or type(error).__name__, error)


def parse_contract_error(error: BaseException) -> str:
    """Get the human readable message for an error from a remote call."""
    return classify(error).message
