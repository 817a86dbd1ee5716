"""web3 connections to a profile's RPC endpoint, and translation of their failures."""

import asyncio
import json
from contextlib import contextmanager
from typing import Iterator, Optional

import aiohttp
import requests
from web3 import AsyncHTTPProvider, AsyncWeb3, HTTPProvider, Web3
from web3.exceptions import BadResponseFormat, ContractLogicError, Web3RPCError

from .constants import DEFAULT_RPC_TIMEOUT
from .exceptions import DeploymentError, NetworkError, RpcError

# Raised by the HTTP providers when the endpoint can't be reached or answers with garbage
TRANSPORT_ERRORS = (
    requests.RequestException,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
    json.JSONDecodeError,
    BadResponseFormat,
)


def connect(url: str, timeout: float = DEFAULT_RPC_TIMEOUT) -> Web3:
    """
    Blocking web3 connection, used for read-only calls.

    No request is made until the first call. Failed requests are not retried.
    """
    provider = HTTPProvider(
        url,
        request_kwargs={"timeout": timeout},
        exception_retry_configuration=None,
    )
    return Web3(provider)


def connect_async(url: str, timeout: float = DEFAULT_RPC_TIMEOUT) -> AsyncWeb3:
    """Asyncio web3 connection, used to submit and confirm deployments."""
    provider = AsyncHTTPProvider(
        url,
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)},
        exception_retry_configuration=None,
    )
    return AsyncWeb3(provider)


def endpoint_of(w3) -> str:
    return str(getattr(w3.provider, "endpoint_uri", None) or w3.provider)


def rpc_error_message(error: Exception) -> str:
    """The node's own error message, verbatim when the response carried one."""
    response = getattr(error, "rpc_response", None)
    if isinstance(response, dict) and isinstance(response.get("error"), dict):
        message = response["error"].get("message")
        if message:
            return str(message)
    return str(getattr(error, "message", None) or error)


def rpc_error_code(error: Exception) -> Optional[int]:
    response = getattr(error, "rpc_response", None)
    if isinstance(response, dict) and isinstance(response.get("error"), dict):
        return response["error"].get("code")
    return None


@contextmanager
def node_errors(action: str, endpoint: str) -> Iterator[None]:
    """
    Translate failures of one node interaction into the library's errors.

    Contract reverts (ContractLogicError) pass through untouched so callers can
    tell "the contract said no" apart from "the node failed".

    Raises:
        RpcError: The node answered with a JSON-RPC error object
        NetworkError: Transport failure or malformed response
    """
    try:
        yield
    except (DeploymentError, ContractLogicError):
        raise
    except Web3RPCError as e:
        raise RpcError(rpc_error_message(e), code=rpc_error_code(e)) from e
    except TRANSPORT_ERRORS as e:
        raise NetworkError(f"Network error during {action} on {endpoint}: {e}") from e
