"""Transaction submission helpers for contract-deployer."""

import rlp
from eth_utils import keccak, to_canonical_address, to_checksum_address
from web3 import Web3

from .exceptions import SubmissionError
from .rpc import RPC_ERRORS
from .signer import SigningAuthority
from .types import PendingTransaction, TransactionRequest


def contract_address(sender: str, nonce: int) -> str:
    """
    Compute the address a contract-creation transaction will deploy to.

    Args:
        sender: Deploying account
        nonce: Nonce of the creation transaction

    Returns:
        Checksummed address: last 20 bytes of keccak(rlp([sender, nonce]))
    """
    digest = keccak(rlp.encode([to_canonical_address(sender), nonce]))
    return to_checksum_address(digest[12:])


def next_nonce(w3: Web3, address: str) -> int:
    """
    Get the next usable nonce for an account, counting pending transactions.

    Raises:
        SubmissionError: If the node cannot be queried
    """
    try:
        return w3.eth.get_transaction_count(address, "pending")
    except RPC_ERRORS as e:
        raise SubmissionError(f"Could not fetch nonce for {address}: {e}") from e


def submit(w3: Web3, authority: SigningAuthority, request: TransactionRequest) -> PendingTransaction:
    """
    Sign and broadcast a transaction.

    Args:
        w3: Chain connection
        authority: Signer matching request.sender
        request: Transaction to send

    Returns:
        PendingTransaction; creation transactions carry their provisional address

    Raises:
        SubmissionError: If the node rejects the transaction (nonce conflict,
            insufficient funds, ...) or cannot be reached
    """
    signed = authority.sign(request)
    try:
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
    except RPC_ERRORS as e:
        raise SubmissionError(f"Transaction broadcast rejected: {e}") from e

    provisional = None
    if request.to is None:
        provisional = contract_address(request.sender, request.nonce)

    return PendingTransaction(
        tx_hash=Web3.to_hex(tx_hash),
        request=request,
        contract_address=provisional,
    )
