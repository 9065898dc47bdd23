"""Signing authority for contract-deployer."""

import binascii
import re
from typing import Optional

from eth_account import Account
from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount
from eth_keys.exceptions import ValidationError as KeyValidationError

from .exceptions import CredentialError
from .types import GasQuote, TransactionRequest

_DECIMAL = re.compile(r"[0-9]+")


class SigningAuthority:
    """
    Sender identity bound to one chain.

    Holds no per-transaction state: gas parameters travel in the
    TransactionRequest built for each submission.
    """

    def __init__(self, account: LocalAccount, chain_id: int):
        self._account = account
        self.chain_id = chain_id

    @property
    def address(self) -> str:
        """Checksummed sender address."""
        return self._account.address

    def request(
        self,
        nonce: int,
        quote: GasQuote,
        data: bytes,
        to: Optional[str] = None,
        value: int = 0,
    ) -> TransactionRequest:
        """
        Build a transaction request from this sender.

        Args:
            nonce: Sender nonce for the transaction
            quote: Gas price and limit for this transaction only
            data: Creation payload or encoded call data
            to: Target contract (None creates a contract)
            value: Wei to transfer

        Returns:
            Immutable TransactionRequest
        """
        return TransactionRequest(
            sender=self.address,
            nonce=nonce,
            chain_id=self.chain_id,
            gas_price=quote.gas_price,
            gas_limit=quote.gas_limit,
            data=data,
            to=to,
            value=value,
        )

    def sign(self, request: TransactionRequest) -> SignedTransaction:
        if request.sender != self.address:
            raise CredentialError(
                f"Request sender {request.sender} does not match signer {self.address}"
            )
        return self._account.sign_transaction(request.to_dict())

    def __repr__(self) -> str:
        return f"SigningAuthority(address={self.address!r}, chain_id={self.chain_id})"


def parse_chain_id(chain_id: str) -> int:
    """
    Parse a base-10 chain identifier.

    Raises:
        CredentialError: If the value is not a positive decimal integer
    """
    raw = str(chain_id).strip()
    if not _DECIMAL.fullmatch(raw) or int(raw) == 0:
        raise CredentialError(f"Chain id must be a positive base-10 integer, got {chain_id!r}")
    return int(raw)


def new_authority(private_key: str, chain_id: str) -> SigningAuthority:
    """
    Derive the signing authority used for every transaction of a run.

    Performs no network I/O.

    Args:
        private_key: Hex-encoded secp256k1 key, with or without 0x
        chain_id: Base-10 chain identifier

    Returns:
        SigningAuthority

    Raises:
        CredentialError: If the key or the chain id cannot be parsed
    """
    chain = parse_chain_id(chain_id)

    try:
        account = Account.from_key(private_key.strip())
    except (ValueError, TypeError, binascii.Error, KeyValidationError) as e:
        raise CredentialError("Private key could not be parsed") from e

    return SigningAuthority(account, chain)
