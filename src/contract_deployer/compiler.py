"""External Solidity compiler invocation for contract-deployer."""

import logging
import subprocess
from pathlib import Path
from typing import List

from .constants import SOLC_EVM_VERSION, SOLC_EXECUTABLE
from .exceptions import CompileError

logger = logging.getLogger(__name__)


def solc_command(source: Path, output_dir: Path, executable: str = SOLC_EXECUTABLE) -> List[str]:
    """Build the fixed solc command line for one source file."""
    return [
        executable,
        "--bin",
        "--abi",
        "--optimize",
        "--output-dir",
        str(output_dir),
        "--evm-version",
        SOLC_EVM_VERSION,
        "--overwrite",
        str(source),
    ]


def compile_contract(source: Path, output_dir: Path, executable: str = SOLC_EXECUTABLE) -> None:
    """
    Compile a Solidity source file into .bin and .abi files.

    Args:
        source: Path to the .sol file
        output_dir: Directory receiving the solc output (created if missing)
        executable: solc binary to run

    Raises:
        CompileError: If solc is not installed or exits with an error
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    cmd = solc_command(source, output_dir, executable)
    logger.debug("running %s", " ".join(cmd))

    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise CompileError(f"Solidity compiler '{executable}' not found") from e
    except subprocess.CalledProcessError as e:
        raise CompileError(f"Failed to compile {source.name}: {e.stderr.strip()}") from e

    if result.stderr.strip():
        logger.warning("solc: %s", result.stderr.strip())
