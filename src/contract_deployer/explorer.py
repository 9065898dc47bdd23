"""Block explorer link formatting for contract-deployer."""


def tx_url(explorer_url: str, tx_hash: str) -> str:
    """
    Format a transaction hash as an explorer link.

    Args:
        explorer_url: Explorer base URL, e.g. "https://sepolia.etherscan.io"
        tx_hash: 0x-prefixed transaction hash

    Returns:
        "<explorer_url>/tx/<tx_hash>", or the bare hash if no explorer is configured
    """
    if not explorer_url:
        return tx_hash
    return f"{explorer_url.rstrip('/')}/tx/{tx_hash}"


def address_url(explorer_url: str, address: str) -> str:
    """Format an address as an explorer link (bare address without an explorer)."""
    if not explorer_url:
        return address
    return f"{explorer_url.rstrip('/')}/address/{address}"
