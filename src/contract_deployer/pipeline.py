"""Deploy, confirm and exercise contracts for contract-deployer."""

import logging
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from web3 import Web3

from .confirmation import wait_for_receipt
from .constants import DEPLOY_GAS_HEADROOM, GETTER_METHOD, SETTER_METHOD
from .deployer import deploy
from .exceptions import ChainRejection, DeploymentError
from .explorer import address_url, tx_url
from .gas import estimate
from .invoker import read, write
from .records import save_record
from .signer import SigningAuthority
from .types import ContractArtifact, DeploymentRecord, PendingTransaction, TransactionReceipt

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    """
    Per-artifact progress.

    COMPILED -> SUBMITTED -> CONFIRMED -> INVOKED_WRITE -> CONFIRMED_WRITE
    -> INVOKED_READ -> RECORDED, with FAILED reachable from any
    non-terminal state.

    An artifact enters COMPILED only once its bytecode has been read, so a
    compile failure ends the run before the artifact has a state; it is
    logged by iter_artifacts instead.
    """

    COMPILED = "compiled"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    INVOKED_WRITE = "invoked-write"
    CONFIRMED_WRITE = "confirmed-write"
    INVOKED_READ = "invoked-read"
    RECORDED = "recorded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (PipelineState.RECORDED, PipelineState.FAILED)


_NEXT_STATE = {
    PipelineState.COMPILED: PipelineState.SUBMITTED,
    PipelineState.SUBMITTED: PipelineState.CONFIRMED,
    PipelineState.CONFIRMED: PipelineState.INVOKED_WRITE,
    PipelineState.INVOKED_WRITE: PipelineState.CONFIRMED_WRITE,
    PipelineState.CONFIRMED_WRITE: PipelineState.INVOKED_READ,
    PipelineState.INVOKED_READ: PipelineState.RECORDED,
}


class DeploymentPipeline:
    """
    Runs the deploy-confirm-invoke sequence for each artifact, one at a time.

    Every error is fatal: the failing artifact moves to FAILED, the error
    propagates, and remaining artifacts are never attempted.
    """

    def __init__(
        self,
        w3: Web3,
        authority: SigningAuthority,
        value: int,
        output_path: Optional[Path] = None,
        explorer_url: str = "",
        receipt_timeout: Optional[float] = None,
        setter: str = SETTER_METHOD,
        getter: str = GETTER_METHOD,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the pipeline.

        Args:
            w3: Chain connection shared by every stage
            authority: Signing authority for every transaction
            value: Value written through the setter
            output_path: Where the record is written (None skips writing)
            explorer_url: Explorer base URL for log links
            receipt_timeout: Seconds to wait for each receipt (None waits forever)
            setter: State-mutating method called after deployment
            getter: Read-only method called after the write is confirmed
            sleep: Sleep function used between receipt polls
        """
        self.w3 = w3
        self.authority = authority
        self.value = value
        self.output_path = output_path
        self.explorer_url = explorer_url
        self.receipt_timeout = receipt_timeout
        self.setter = setter
        self.getter = getter
        self._sleep = sleep
        self.history: Dict[str, List[PipelineState]] = {}

    def state(self, name: str) -> Optional[PipelineState]:
        """Current state of an artifact, or None if it was never started."""
        states = self.history.get(name)
        return states[-1] if states else None

    def _advance(self, artifact: ContractArtifact, state: PipelineState) -> None:
        current = self.state(artifact.name)
        if current is None or current.terminal:
            if state is not PipelineState.COMPILED:
                if current is not None:
                    raise RuntimeError(f"{artifact.name} already finished in {current.name}")
                raise RuntimeError(f"{artifact.name} must start in COMPILED, not {state.name}")
            # A new attempt replaces the history of a finished one
            self.history[artifact.name] = [state]
            return
        if state is not PipelineState.FAILED and _NEXT_STATE.get(current) is not state:
            raise RuntimeError(
                f"Illegal transition for {artifact.name}: {current.name} -> {state.name}"
            )
        self.history[artifact.name].append(state)

    def _confirm(self, pending: PendingTransaction, what: str) -> TransactionReceipt:
        receipt = wait_for_receipt(
            self.w3, pending, timeout=self.receipt_timeout, sleep=self._sleep
        )
        if not receipt.succeeded:
            raise ChainRejection(f"{what} failed (tx {receipt.tx_hash})", receipt=receipt)
        return receipt

    def run_artifact(self, artifact: ContractArtifact) -> DeploymentRecord:
        """
        Deploy one artifact, write the value, read it back and record the outcome.

        Args:
            artifact: Compiled contract

        Returns:
            DeploymentRecord

        Raises:
            DeploymentError: Any stage failure (the artifact ends in FAILED)
        """
        self._advance(artifact, PipelineState.COMPILED)
        try:
            return self._run(artifact)
        except DeploymentError:
            reached = self.state(artifact.name)
            self._advance(artifact, PipelineState.FAILED)
            logger.error("error - contract %s failed after %s", artifact.name, reached.value)
            raise

    def _run(self, artifact: ContractArtifact) -> DeploymentRecord:
        name = artifact.name
        sender = self.authority.address

        quote = estimate(
            self.w3, sender, artifact.creation_payload(), headroom=DEPLOY_GAS_HEADROOM
        )

        logger.info("start - deploying contract %s", name)
        address, pending = deploy(self.w3, self.authority, artifact, quote)
        self._advance(artifact, PipelineState.SUBMITTED)
        logger.info(
            "pending - contract %s waiting for transaction: %s",
            name,
            tx_url(self.explorer_url, pending.tx_hash),
        )

        receipt = self._confirm(pending, f"contract {name} deployment")
        if receipt.contract_address and receipt.contract_address != address:
            logger.warning(
                "contract %s deployed at %s, expected %s", name, receipt.contract_address, address
            )
            address = receipt.contract_address
        self._advance(artifact, PipelineState.CONFIRMED)
        logger.info(
            "success - contract %s deployed: %s", name, address_url(self.explorer_url, address)
        )

        pending = write(self.w3, address, artifact.abi, self.authority, self.setter, self.value)
        self._advance(artifact, PipelineState.INVOKED_WRITE)
        logger.info(
            "pending - %s waiting for transaction: %s",
            self.setter,
            tx_url(self.explorer_url, pending.tx_hash),
        )

        self._confirm(pending, f"{self.setter} transaction")
        self._advance(artifact, PipelineState.CONFIRMED_WRITE)
        logger.info("success - %s transaction completed", self.setter)

        current = read(self.w3, address, artifact.abi, self.getter)
        self._advance(artifact, PipelineState.INVOKED_READ)
        logger.info("success - %s current value is: %s", self.getter, current)

        record = DeploymentRecord(
            value=current, deployer_address=sender, contract_address=address
        )
        if self.output_path is not None:
            save_record(record, self.output_path)
        self._advance(artifact, PipelineState.RECORDED)
        return record

    def run(self, artifacts: Iterable[ContractArtifact]) -> List[DeploymentRecord]:
        """
        Process artifacts sequentially, stopping at the first failure.

        The record file is overwritten after every artifact, so it holds the
        last one processed.

        Args:
            artifacts: Artifacts to deploy (consumed lazily)

        Returns:
            Records of every artifact, in order

        Raises:
            DeploymentError: The first failure; later artifacts are not attempted
        """
        return [self.run_artifact(artifact) for artifact in artifacts]
