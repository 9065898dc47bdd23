"""Data types and dataclasses for contract-deployer."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from eth_abi import encode
from eth_abi.exceptions import EncodingError
from eth_utils.abi import collapse_if_tuple
from web3 import Web3

from .exceptions import ArtifactReadError


@dataclass(frozen=True)
class ContractArtifact:
    """A compiled contract: creation bytecode plus its ABI."""

    name: str  # Source file stem, e.g. "Storage"
    bytecode: bytes  # Creation bytecode without constructor arguments
    abi: List[Dict[str, Any]] = field(hash=False)

    def constructor_inputs(self) -> List[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return list(item.get("inputs", []))
        return []

    def creation_payload(self, args: Sequence[Any] = ()) -> bytes:
        """
        Build the contract-creation payload.

        Args:
            args: Constructor arguments, ABI-encoded and appended to the bytecode

        Returns:
            Bytecode followed by the encoded arguments

        Raises:
            ArtifactReadError: If the arguments do not match the constructor
        """
        inputs = self.constructor_inputs()
        if len(args) != len(inputs):
            raise ArtifactReadError(
                f"Contract '{self.name}' constructor takes {len(inputs)} "
                f"argument(s), got {len(args)}"
            )
        if not inputs:
            return self.bytecode

        types = [collapse_if_tuple(inp) for inp in inputs]
        try:
            encoded = encode(types, list(args))
        except EncodingError as e:
            raise ArtifactReadError(
                f"Cannot encode constructor arguments for '{self.name}': {e}"
            ) from e
        return self.bytecode + encoded


@dataclass(frozen=True)
class GasQuote:
    """Gas price and gas limit for a single transaction."""

    gas_price: int  # wei per unit
    gas_limit: int


@dataclass(frozen=True)
class TransactionRequest:
    """Fully specified, unsigned transaction. Built fresh for every submission."""

    sender: str
    nonce: int
    chain_id: int
    gas_price: int
    gas_limit: int
    data: bytes
    to: Optional[str] = None  # None for contract creation
    value: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Return the transaction fields in the form eth-account signs."""
        tx: Dict[str, Any] = {
            "nonce": self.nonce,
            "chainId": self.chain_id,
            "gasPrice": self.gas_price,
            "gas": self.gas_limit,
            "value": self.value,
            "data": self.data,
        }
        if self.to is not None:
            tx["to"] = self.to
        return tx


@dataclass(frozen=True)
class PendingTransaction:
    """A broadcast transaction awaiting confirmation."""

    tx_hash: str  # 0x-prefixed
    request: TransactionRequest
    contract_address: Optional[str] = None  # Provisional, creation only


@dataclass(frozen=True)
class TransactionReceipt:
    """Terminal outcome of a mined transaction."""

    tx_hash: str
    status: int  # 1 = success, 0 = failure
    block_number: int
    gas_used: int
    contract_address: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @classmethod
    def from_web3(cls, receipt: Any) -> "TransactionReceipt":
        return cls(
            tx_hash=Web3.to_hex(receipt["transactionHash"]),
            status=receipt["status"],
            block_number=receipt["blockNumber"],
            gas_used=receipt["gasUsed"],
            contract_address=receipt.get("contractAddress"),
        )


@dataclass(frozen=True)
class DeploymentRecord:
    """Final observable state of one deployed and exercised contract."""

    value: int  # Value read back after the write
    deployer_address: str
    contract_address: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "getUint256Value": str(self.value),
            "deployerAddress": self.deployer_address,
            "contractAddress": self.contract_address,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "DeploymentRecord":
        return cls(
            value=int(data["getUint256Value"]),
            deployer_address=data["deployerAddress"],
            contract_address=data["contractAddress"],
        )
