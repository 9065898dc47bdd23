"""JSON-RPC connection handling for contract-deployer."""

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from .constants import RPC_REQUEST_TIMEOUT

# Failures raised by web3 or its HTTP transport for any eth_* call
RPC_ERRORS = (Web3Exception, requests.RequestException)


def connect(rpc_url: str, timeout: float = RPC_REQUEST_TIMEOUT) -> Web3:
    """
    Create a connection to a JSON-RPC node.

    No request is sent until the first eth_* call. Retries inside web3's
    HTTP provider are disabled: every failed call surfaces to the caller.

    Args:
        rpc_url: HTTP(S) endpoint of the node
        timeout: Per-request timeout in seconds

    Returns:
        Web3 instance bound to the endpoint
    """
    provider = Web3.HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout},
        session=requests.Session(),
        exception_retry_configuration=None,
    )
    return Web3(provider)
