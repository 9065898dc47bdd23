"""Shared pytest fixtures for contract-deployer tests."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import requests
import responses
import rlp
from eth_account import Account
from eth_utils import function_signature_to_4byte_selector, keccak, to_checksum_address

from contract_deployer.rpc import connect
from contract_deployer.signer import new_authority
from contract_deployer.types import ContractArtifact

RPC_URL = "http://fake-node.test:8545"
CHAIN_ID = 1337

# First Hardhat/Anvil development account
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEPLOYER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

STORAGE_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [],
        "name": "getUint256",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "_value", "type": "uint256"}],
        "name": "setUint256",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
STORAGE_BYTECODE = "6080604052348015600e575f80fd5b50603e80601a5f395ff3fe"

SET_SELECTOR = function_signature_to_4byte_selector("setUint256(uint256)")
GET_SELECTOR = function_signature_to_4byte_selector("getUint256()")

ENV_VARS = [
    "PRIVATE_KEY",
    "CHAIN_ID",
    "EXPLORER_URL",
    "RPC_PROVIDER",
    "UINT256_VALUE",
    "RECEIPT_TIMEOUT",
]


class RpcError(Exception):
    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class FakeNode:
    """
    Minimal JSON-RPC node served through a responses callback.

    Understands contract creation plus setUint256/getUint256 calls; every
    contract it creates behaves like a single-slot uint256 store.
    """

    def __init__(self, url: str = RPC_URL, chain_id: int = CHAIN_ID):
        self.url = url
        self.chain_id = chain_id
        self.gas_price = 2_000_000_000
        self.creation_gas = 150_000
        self.call_gas = 45_000
        self.block = 100

        self.nonces: Dict[str, int] = {}
        self.storage: Dict[str, int] = {}  # lowercase contract address -> value
        self.receipts: Dict[str, Dict[str, Any]] = {}
        self.transactions: List[Dict[str, Any]] = []
        self.calls: List[str] = []

        # Failure injection
        self.pending_polls = 0  # null receipts returned before each tx is mined
        self.reject_sends: Optional[str] = None
        self.estimate_error: Optional[str] = None
        self.call_error: Optional[str] = None
        self.fail_status: set = set()  # "create" and/or "setUint256"
        self.receipts_down = False
        self.address_override: Optional[str] = None
        self._polls: Dict[str, int] = {}

    def handle(self, request):
        body = json.loads(request.body)
        method = body["method"]
        self.calls.append(method)
        handler = getattr(self, "_" + method)
        try:
            payload = {"jsonrpc": "2.0", "id": body["id"], "result": handler(*body["params"])}
        except RpcError as e:
            payload = {
                "jsonrpc": "2.0",
                "id": body["id"],
                "error": {"code": e.code, "message": e.message},
            }
        return (200, {}, json.dumps(payload))

    def add_contract(self, address: str, value: int = 0) -> None:
        self.storage[address.lower()] = value

    def _eth_chainId(self):
        return hex(self.chain_id)

    def _eth_blockNumber(self):
        return hex(self.block)

    def _eth_gasPrice(self):
        return hex(self.gas_price)

    def _eth_estimateGas(self, tx, *rest):
        if self.estimate_error:
            raise RpcError(3, self.estimate_error)
        return hex(self.creation_gas if not tx.get("to") else self.call_gas)

    def _eth_getTransactionCount(self, address, *rest):
        return hex(self.nonces.get(address.lower(), 0))

    def _eth_sendRawTransaction(self, raw_hex):
        if self.reject_sends:
            raise RpcError(-32000, self.reject_sends)

        raw = bytes.fromhex(raw_hex[2:])
        nonce, gas_price, gas, to, value, data = rlp.decode(raw)[:6]
        sender = Account.recover_transaction(raw_hex).lower()
        nonce = int.from_bytes(nonce, "big")
        if nonce != self.nonces.get(sender, 0):
            raise RpcError(-32000, "nonce too low")
        self.nonces[sender] = nonce + 1

        tx_hash = "0x" + keccak(raw).hex()
        kind = "create" if not to else "call"
        created = None
        if kind == "create":
            created = to_checksum_address(keccak(rlp.encode([bytes.fromhex(sender[2:]), nonce]))[12:])
            if self.address_override:
                created = self.address_override
        elif data[:4] == SET_SELECTOR:
            kind = "setUint256"

        status = 0 if kind in self.fail_status else 1
        if status == 1:
            if kind == "create":
                self.storage[created.lower()] = 0
            elif kind == "setUint256":
                self.storage["0x" + to.hex()] = int.from_bytes(data[4:36], "big")

        self.block += 1
        self.transactions.append(
            {
                "hash": tx_hash,
                "kind": kind,
                "from": sender,
                "to": None if not to else "0x" + to.hex(),
                "nonce": nonce,
                "gas": int.from_bytes(gas, "big"),
                "gas_price": int.from_bytes(gas_price, "big"),
                "data": data,
            }
        )
        self.receipts[tx_hash] = {
            "transactionHash": tx_hash,
            "transactionIndex": "0x0",
            "blockHash": "0x" + "ab" * 32,
            "blockNumber": hex(self.block),
            "from": sender,
            "to": None if not to else "0x" + to.hex(),
            "cumulativeGasUsed": hex(21_000),
            "gasUsed": hex(21_000),
            "effectiveGasPrice": hex(int.from_bytes(gas_price, "big")),
            "contractAddress": created,
            "logs": [],
            "status": hex(status),
            "type": "0x0",
        }
        return tx_hash

    def _eth_getTransactionReceipt(self, tx_hash):
        if self.receipts_down:
            raise requests.ConnectionError("connection reset by peer")
        polls = self._polls.get(tx_hash, 0)
        self._polls[tx_hash] = polls + 1
        if polls < self.pending_polls:
            return None
        return self.receipts.get(tx_hash)

    def _eth_call(self, tx, *rest):
        if self.call_error:
            raise RpcError(-32000, self.call_error)
        to = tx["to"].lower()
        if to not in self.storage:
            return "0x"
        data = bytes.fromhex(tx["data"][2:])
        if data[:4] == GET_SELECTOR:
            return "0x" + self.storage[to].to_bytes(32, "big").hex()
        raise RpcError(3, "execution reverted")


@pytest.fixture
def fake_node():
    """Serve a FakeNode at RPC_URL for the duration of the test."""
    node = FakeNode()
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add_callback(
            responses.POST,
            RPC_URL,
            callback=node.handle,
            content_type="application/json",
        )
        yield node


@pytest.fixture
def w3(fake_node: FakeNode):
    """Web3 connection to the fake node."""
    return connect(fake_node.url)


@pytest.fixture
def authority():
    """Signing authority for the first development account."""
    return new_authority(PRIVATE_KEY, str(CHAIN_ID))


@pytest.fixture
def storage_artifact() -> ContractArtifact:
    """A get/set uint256 contract."""
    return ContractArtifact(
        name="Storage",
        bytecode=bytes.fromhex(STORAGE_BYTECODE),
        abi=STORAGE_ABI,
    )


@pytest.fixture
def compiled_dir(tmp_path: Path) -> Path:
    """Directory holding solc-style output for Storage."""
    out = tmp_path / "compiled-contracts"
    out.mkdir()
    (out / "Storage.bin").write_text(STORAGE_BYTECODE + "\n")
    (out / "Storage.abi").write_text(json.dumps(STORAGE_ABI))
    return out


@pytest.fixture
def contracts_dir(tmp_path: Path) -> Path:
    """Directory holding a single Storage.sol source."""
    src = tmp_path / "contracts"
    src.mkdir()
    (src / "Storage.sol").write_text("// SPDX-License-Identifier: MIT\n")
    return src


@pytest.fixture
def clean_env(monkeypatch):
    """Remove deployer variables from os.environ and restore them afterwards."""
    for name in ENV_VARS:
        # setenv first so that values later written by load_dotenv are undone too
        monkeypatch.setenv(name, "unset")
        monkeypatch.delenv(name)
    yield os.environ
