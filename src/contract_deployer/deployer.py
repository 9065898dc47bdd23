"""Contract-creation transactions for contract-deployer."""

import logging
from typing import Any, Sequence, Tuple

from web3 import Web3

from .signer import SigningAuthority
from .transactions import next_nonce, submit
from .types import ContractArtifact, GasQuote, PendingTransaction

logger = logging.getLogger(__name__)


def deploy(
    w3: Web3,
    authority: SigningAuthority,
    artifact: ContractArtifact,
    quote: GasQuote,
    constructor_args: Sequence[Any] = (),
) -> Tuple[str, PendingTransaction]:
    """
    Broadcast a contract-creation transaction.

    The returned address is provisional: the contract must not be used until
    the transaction has a successful receipt.

    Args:
        w3: Chain connection
        authority: Signing authority of the deployer
        artifact: Compiled contract (bytecode and ABI)
        quote: Gas price and limit for this transaction
        constructor_args: Arguments appended to the bytecode

    Returns:
        Tuple of (provisional_address, pending_transaction)

    Raises:
        ArtifactReadError: If constructor_args do not match the ABI
        SubmissionError: If the nonce lookup or the broadcast fails
    """
    payload = artifact.creation_payload(constructor_args)
    nonce = next_nonce(w3, authority.address)
    request = authority.request(nonce=nonce, quote=quote, data=payload)

    pending = submit(w3, authority, request)
    logger.debug("creation tx %s nonce=%d gas=%d", pending.tx_hash, nonce, quote.gas_limit)
    return pending.contract_address, pending
