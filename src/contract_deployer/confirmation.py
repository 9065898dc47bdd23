"""Receipt polling for contract-deployer."""

import logging
import time
from typing import Callable, Optional

from web3 import Web3
from web3.exceptions import TransactionIndexingInProgress, TransactionNotFound

from .constants import DEFAULT_POLL_INTERVAL, MAX_POLL_INTERVAL, POLL_BACKOFF
from .exceptions import NetworkError, TransactionTimeout
from .rpc import RPC_ERRORS
from .types import PendingTransaction, TransactionReceipt

logger = logging.getLogger(__name__)


def wait_for_receipt(
    w3: Web3,
    pending: PendingTransaction,
    timeout: Optional[float] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    max_interval: float = MAX_POLL_INTERVAL,
    backoff: float = POLL_BACKOFF,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> TransactionReceipt:
    """
    Block until a transaction is mined.

    The receipt status is not interpreted here: a reverted transaction is
    returned like any other and the caller decides what failure means.

    Args:
        w3: Chain connection
        pending: Transaction to wait for
        timeout: Seconds to wait before giving up (None waits forever)
        poll_interval: Delay before the second poll
        max_interval: Upper bound for the delay between polls
        backoff: Multiplier applied to the delay after each empty poll
        sleep: Sleep function (injectable for tests)
        clock: Monotonic clock (injectable for tests)

    Returns:
        TransactionReceipt

    Raises:
        NetworkError: If the node cannot be reached while polling
        TransactionTimeout: If timeout elapses before the transaction is mined
    """
    deadline = None if timeout is None else clock() + timeout
    interval = poll_interval
    polls = 0

    while True:
        polls += 1
        try:
            receipt = w3.eth.get_transaction_receipt(pending.tx_hash)
        except (TransactionNotFound, TransactionIndexingInProgress):
            receipt = None
        except RPC_ERRORS as e:
            raise NetworkError(f"Lost connection while waiting for {pending.tx_hash}: {e}") from e

        # Some nodes return pending receipts without a block
        if receipt is not None and receipt.get("blockNumber") is not None:
            logger.debug("%s mined after %d poll(s)", pending.tx_hash, polls)
            return TransactionReceipt.from_web3(receipt)

        delay = interval
        if deadline is not None:
            remaining = deadline - clock()
            if remaining <= 0:
                raise TransactionTimeout(
                    f"Transaction {pending.tx_hash} not mined after {timeout} seconds"
                )
            delay = min(delay, remaining)

        sleep(delay)
        interval = min(interval * backoff, max_interval)
