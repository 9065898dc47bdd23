"""
contract-deployer: compile, deploy and exercise smart contracts over JSON-RPC
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import iter_artifacts, read_artifact
from .confirmation import wait_for_receipt
from .deployer import deploy
from .exceptions import (
    ArtifactReadError,
    CallError,
    ChainRejection,
    CompileError,
    ConfigError,
    CredentialError,
    DecodeError,
    DeploymentError,
    EstimationError,
    NetworkError,
    RecordWriteError,
    SubmissionError,
    TransactionTimeout,
)
from .gas import estimate
from .invoker import read, write
from .pipeline import DeploymentPipeline, PipelineState
from .signer import SigningAuthority, new_authority
from .types import (
    ContractArtifact,
    DeploymentRecord,
    GasQuote,
    PendingTransaction,
    TransactionReceipt,
    TransactionRequest,
)

try:
    __version__ = version("contract-deployer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentPipeline",
    "PipelineState",
    "iter_artifacts",
    "read_artifact",
    "estimate",
    "new_authority",
    "SigningAuthority",
    "deploy",
    "wait_for_receipt",
    "read",
    "write",
    "ContractArtifact",
    "DeploymentRecord",
    "GasQuote",
    "PendingTransaction",
    "TransactionReceipt",
    "TransactionRequest",
    "DeploymentError",
    "ConfigError",
    "CompileError",
    "ArtifactReadError",
    "EstimationError",
    "CredentialError",
    "SubmissionError",
    "NetworkError",
    "RecordWriteError",
    "CallError",
    "DecodeError",
    "ChainRejection",
    "TransactionTimeout",
]
