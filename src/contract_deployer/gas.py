"""Gas price and gas limit estimation for contract-deployer."""

import logging
from typing import Any, Dict, Optional

from web3 import Web3

from .exceptions import EstimationError
from .rpc import RPC_ERRORS
from .types import GasQuote

logger = logging.getLogger(__name__)


def estimate(
    w3: Web3,
    sender: str,
    payload: bytes,
    to: Optional[str] = None,
    headroom: int = 0,
) -> GasQuote:
    """
    Quote gas for a transaction against current chain state.

    The gas price is queried on every call; nothing is cached between
    transactions.

    Args:
        w3: Chain connection
        sender: Address the transaction will be sent from
        payload: Creation payload (to=None) or encoded call data
        to: Target contract address for invocations
        headroom: Units added to the raw gas estimate

    Returns:
        GasQuote with the suggested gas price and the padded gas limit

    Raises:
        EstimationError: If the node does not answer or the simulation reverts
    """
    call: Dict[str, Any] = {"from": sender, "data": Web3.to_hex(payload)}
    if to is not None:
        call["to"] = to

    try:
        gas_price = w3.eth.gas_price
        raw_estimate = w3.eth.estimate_gas(call)
    except RPC_ERRORS as e:
        target = to or "contract creation"
        raise EstimationError(f"Gas estimation failed for {target}: {e}") from e

    logger.debug(
        "gas estimate %d (+%d headroom) at price %d", raw_estimate, headroom, gas_price
    )
    return GasQuote(gas_price=gas_price, gas_limit=raw_estimate + headroom)
