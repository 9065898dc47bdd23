"""Contract method invocation for contract-deployer."""

import logging
from typing import Any, Dict, List, Tuple, Type, Union

from eth_abi.exceptions import DecodingError
from eth_utils.abi import collapse_if_tuple
from web3 import Web3
from web3.exceptions import Web3Exception

from .exceptions import CallError, DecodeError, SubmissionError
from .gas import estimate
from .rpc import RPC_ERRORS
from .signer import SigningAuthority
from .transactions import next_nonce, submit
from .types import PendingTransaction

logger = logging.getLogger(__name__)


def function_abi(abi: List[Dict[str, Any]], method: str, nargs: int) -> Dict[str, Any]:
    """
    Find a function entry in an ABI.

    Args:
        abi: Contract ABI
        method: Function name
        nargs: Number of arguments (selects among overloads)

    Returns:
        Function ABI entry

    Raises:
        KeyError: If no function with that name and arity exists
    """
    for item in abi:
        if (
            item.get("type") == "function"
            and item.get("name") == method
            and len(item.get("inputs", [])) == nargs
        ):
            return item
    raise KeyError(f"Function '{method}' with {nargs} argument(s) not found in ABI")


def expected_python_type(abi_type: str) -> Union[Type, Tuple[Type, ...]]:
    """Map an ABI type to the Python type eth-abi decodes it into."""
    if abi_type.endswith("]"):
        return (list, tuple)
    if abi_type.startswith("("):
        return tuple
    if abi_type.startswith(("uint", "int")):
        return int
    if abi_type == "bool":
        return bool
    if abi_type.startswith("bytes"):
        return bytes
    # address, string
    return str


def _matches(value: Any, expected: Union[Type, Tuple[Type, ...]]) -> bool:
    # bool is an int subclass; an int slot holding a bool is a mismatch
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)


def encode_call(
    w3: Web3, address: str, abi: List[Dict[str, Any]], method: str, args: Tuple[Any, ...]
) -> bytes:
    """Encode selector and arguments of a method call. Raises Web3Exception on ABI mismatch."""
    contract = w3.eth.contract(address=address, abi=abi)
    return Web3.to_bytes(hexstr=contract.encode_abi(method, args=list(args)))


def write(
    w3: Web3,
    address: str,
    abi: List[Dict[str, Any]],
    authority: SigningAuthority,
    method: str,
    *args: Any,
) -> PendingTransaction:
    """
    Submit a state-mutating method call.

    Gas is the raw estimate for the call data (no headroom). Confirmation is
    left to the caller.

    Args:
        w3: Chain connection
        address: Deployed contract address
        abi: Contract ABI
        authority: Signing authority of the caller
        method: Function name
        *args: Function arguments

    Returns:
        PendingTransaction

    Raises:
        EstimationError: If the call cannot be estimated (e.g. it would revert)
        SubmissionError: If the arguments do not match the ABI or the broadcast fails
    """
    try:
        data = encode_call(w3, address, abi, method, args)
    except Web3Exception as e:
        raise SubmissionError(f"Cannot encode call to {method}: {e}") from e

    quote = estimate(w3, authority.address, data, to=address)
    nonce = next_nonce(w3, authority.address)
    request = authority.request(nonce=nonce, quote=quote, data=data, to=address)

    pending = submit(w3, authority, request)
    logger.debug("%s tx %s nonce=%d gas=%d", method, pending.tx_hash, nonce, quote.gas_limit)
    return pending


def read(
    w3: Web3,
    address: str,
    abi: List[Dict[str, Any]],
    method: str,
    *args: Any,
) -> Any:
    """
    Call a method against current chain state and decode its first return value.

    No transaction is sent.

    Args:
        w3: Chain connection
        address: Deployed contract address
        abi: Contract ABI
        method: Function name
        *args: Function arguments

    Returns:
        The decoded first return value

    Raises:
        CallError: If the method is unknown or the call fails
        DecodeError: If nothing is returned or the value has the wrong type
    """
    try:
        fn_abi = function_abi(abi, method, len(args))
        data = encode_call(w3, address, abi, method, args)
    except (KeyError, Web3Exception) as e:
        raise CallError(f"Cannot encode call to {method}: {e}") from e

    try:
        raw = w3.eth.call({"to": address, "data": Web3.to_hex(data)})
    except RPC_ERRORS as e:
        raise CallError(f"Failed to call {method}: {e}") from e

    output_types = [collapse_if_tuple(out) for out in fn_abi.get("outputs", [])]
    if not output_types or not raw:
        raise DecodeError(f"Empty result returned from {method}")

    try:
        values = w3.codec.decode(output_types, raw)
    except DecodingError as e:
        raise DecodeError(f"Cannot decode result of {method}: {e}") from e

    if len(values) == 0:
        raise DecodeError(f"Empty result returned from {method}")

    value = values[0]
    if not _matches(value, expected_python_type(output_types[0])):
        raise DecodeError(
            f"Unexpected type returned from {method}: {type(value).__name__} "
            f"for {output_types[0]}"
        )
    return value
