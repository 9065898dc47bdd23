"""Environment-sourced settings for contract-deployer."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import load_dotenv

from .constants import (
    ENV_CHAIN_ID,
    ENV_EXPLORER_URL,
    ENV_PRIVATE_KEY,
    ENV_RECEIPT_TIMEOUT,
    ENV_RPC_PROVIDER,
    ENV_UINT256_VALUE,
    UINT256_MAX,
)
from .exceptions import ConfigError
from .paths import get_default_paths


@dataclass(frozen=True)
class Settings:
    """Inputs for one deployment run."""

    private_key: str = field(repr=False)
    chain_id: str  # Raw string; parsed when the signing authority is built
    rpc_url: str
    uint256_value: int
    explorer_url: str
    contracts_dir: Path
    compiled_dir: Path
    output_path: Path
    receipt_timeout: Optional[float] = None  # None waits forever


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "").strip()
    if not value:
        raise ConfigError(f"{name} environment variable not set")
    return value


def parse_uint256(raw: str, name: str = ENV_UINT256_VALUE) -> int:
    """
    Parse a base-10 unsigned 256-bit integer.

    Raises:
        ConfigError: If the value is not a decimal integer in [0, 2**256)
    """
    raw = raw.strip()
    if not raw.isascii() or not raw.isdigit():
        raise ConfigError(f"{name} must be a base-10 unsigned integer, got {raw!r}")
    value = int(raw)
    if value > UINT256_MAX:
        raise ConfigError(f"{name} does not fit in uint256: {raw}")
    return value


def parse_timeout(raw: Optional[str], name: str = ENV_RECEIPT_TIMEOUT) -> Optional[float]:
    """
    Parse a receipt timeout in seconds; blank means no timeout.

    Raises:
        ConfigError: If the value is not a positive number
    """
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}") from e
    if not timeout > 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return timeout


def load_settings(
    env_file: Optional[Union[Path, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    contracts_dir: Optional[Union[Path, str]] = None,
    compiled_dir: Optional[Union[Path, str]] = None,
    output_path: Optional[Union[Path, str]] = None,
) -> Settings:
    """
    Load run settings from the environment.

    Args:
        env_file: .env file to load first (defaults to ./.env); a missing file is ignored
        environ: Mapping to read instead of os.environ (no .env loading when given)
        contracts_dir: Override for the Solidity sources directory
        compiled_dir: Override for the solc output directory
        output_path: Override for the output record path

    Returns:
        Settings for the run

    Raises:
        ConfigError: If a required variable is missing or malformed
    """
    if environ is None:
        load_dotenv(dotenv_path=env_file or Path.cwd() / ".env", override=False)
        environ = os.environ

    default_contracts, default_compiled, default_output = get_default_paths()

    return Settings(
        private_key=_require(environ, ENV_PRIVATE_KEY),
        chain_id=_require(environ, ENV_CHAIN_ID),
        rpc_url=_require(environ, ENV_RPC_PROVIDER),
        uint256_value=parse_uint256(_require(environ, ENV_UINT256_VALUE)),
        explorer_url=environ.get(ENV_EXPLORER_URL, "").strip(),
        contracts_dir=Path(contracts_dir) if contracts_dir else default_contracts,
        compiled_dir=Path(compiled_dir) if compiled_dir else default_compiled,
        output_path=Path(output_path) if output_path else default_output,
        receipt_timeout=parse_timeout(environ.get(ENV_RECEIPT_TIMEOUT)),
    )
