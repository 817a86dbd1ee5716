"""Custom exception classes for rcc-stake-deployer."""

from typing import Optional


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised for a bad or missing profile, credential or artifact, before any network call."""

    pass


class ArtifactNotFoundError(ConfigurationError, FileNotFoundError):
    """Raised when a compiled contract artifact cannot be located."""

    pass


class NetworkError(DeploymentError, ConnectionError):
    """Raised when the RPC endpoint is unreachable, answers with garbage or fails to serve a read."""

    pass


class RpcError(NetworkError):
    """Raised when the node answers a read with a JSON-RPC error object instead of a result."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.message = message


class TransactionRejectedError(DeploymentError):
    """Raised when the chain refuses or reverts a deployment transaction.

    ``reason`` carries the node's rejection message verbatim.
    """

    def __init__(self, reason: str, transaction_hash: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.transaction_hash = transaction_hash


class ConfirmationTimeoutError(DeploymentError, TimeoutError):
    """Raised when a caller-imposed deadline fires before confirmation.

    The transaction may still be mined later: treat this as "unknown", not "failed".
    """

    def __init__(self, message: str, transaction_hash: Optional[str] = None):
        super().__init__(message)
        self.transaction_hash = transaction_hash


class ContractNotDeployedError(DeploymentError, RuntimeError):
    """Raised when the callable surface of a still-pending handle is used."""

    pass
