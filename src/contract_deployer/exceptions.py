"""Custom exception classes for contract-deployer."""

from typing import Any, Optional


class DeploymentError(Exception):
    """Base exception for every failure that aborts a deployment run."""

    pass


class ConfigError(DeploymentError, ValueError):
    """Raised when an environment input is missing or malformed."""

    pass


class CompileError(DeploymentError, RuntimeError):
    """Raised when the external Solidity compiler cannot be run or fails."""

    pass


class ArtifactReadError(DeploymentError, ValueError):
    """Raised when a bytecode or interface file is missing or malformed."""

    pass


class EstimationError(DeploymentError, RuntimeError):
    """Raised when gas price or gas limit cannot be estimated."""

    pass


class CredentialError(DeploymentError, ValueError):
    """Raised when the private key or chain id cannot be parsed."""

    pass


class SubmissionError(DeploymentError, RuntimeError):
    """Raised when the node rejects or fails to accept a transaction."""

    pass


class NetworkError(DeploymentError, ConnectionError):
    """Raised when connectivity is lost while polling for a receipt."""

    pass


class CallError(DeploymentError, RuntimeError):
    """Raised when a read-only contract call fails."""

    pass


class DecodeError(DeploymentError, ValueError):
    """Raised when a contract call returns nothing or an unexpected type."""

    pass


class ChainRejection(DeploymentError, RuntimeError):
    """Raised when a mined transaction reports a non-success status."""

    def __init__(self, message: str, receipt: Optional[Any] = None):
        super().__init__(message)
        self.receipt = receipt


class TransactionTimeout(DeploymentError, TimeoutError):
    """Raised when a transaction is not mined within the configured timeout."""

    pass


class RecordWriteError(DeploymentError, OSError):
    """Raised when the deployment record cannot be written."""

    pass
