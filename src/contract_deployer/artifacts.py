"""Compiled artifact readers for contract-deployer."""

import json
import logging
from pathlib import Path
from typing import Iterator

from .compiler import compile_contract
from .constants import SOURCE_SUFFIX
from .exceptions import ArtifactReadError, CompileError
from .paths import get_artifact_paths
from .types import ContractArtifact

logger = logging.getLogger(__name__)


def read_bytecode(path: Path) -> bytes:
    """
    Read a solc .bin file.

    Args:
        path: Path to the hex-encoded bytecode file

    Returns:
        Raw creation bytecode

    Raises:
        ArtifactReadError: If the file is missing, empty, or not hex
    """
    try:
        text = path.read_text().strip()
    except FileNotFoundError as e:
        raise ArtifactReadError(f"Bytecode file not found: {path}") from e

    if text.startswith(("0x", "0X")):
        text = text[2:]
    if not text:
        raise ArtifactReadError(f"Bytecode file is empty (abstract contract?): {path}")

    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise ArtifactReadError(f"Bytecode file is not valid hex: {path}") from e


def read_abi(path: Path) -> list:
    """
    Read a solc .abi file.

    Raises:
        ArtifactReadError: If the file is missing or is not a JSON list
    """
    try:
        with open(path) as f:
            abi = json.load(f)
    except FileNotFoundError as e:
        raise ArtifactReadError(f"Interface file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ArtifactReadError(f"Interface file is not valid JSON: {path}: {e}") from e

    if not isinstance(abi, list) or not all(isinstance(item, dict) for item in abi):
        raise ArtifactReadError(f"Interface file must contain a JSON list of entries: {path}")
    return abi


def read_artifact(name: str, compiled_dir: Path) -> ContractArtifact:
    """
    Load the compiled bytecode and ABI of a contract.

    Args:
        name: Contract name (file stem of both .bin and .abi)
        compiled_dir: Directory holding solc output

    Returns:
        ContractArtifact

    Raises:
        ArtifactReadError: If either file is missing or malformed
    """
    bin_path, abi_path = get_artifact_paths(name, compiled_dir)
    return ContractArtifact(
        name=name,
        bytecode=read_bytecode(bin_path),
        abi=read_abi(abi_path),
    )


def iter_artifacts(
    contracts_dir: Path, compiled_dir: Path, compile: bool = True
) -> Iterator[ContractArtifact]:
    """
    Yield one artifact per Solidity source, in file name order.

    Each source is compiled right before it is read, so a failure in a later
    source only surfaces after the earlier artifacts have been consumed.

    Args:
        contracts_dir: Directory containing *.sol files
        compiled_dir: Directory for solc output
        compile: Run solc before reading (False reads existing output only)

    Raises:
        ArtifactReadError: If contracts_dir does not exist or an artifact is malformed
        CompileError: If compilation fails
    """
    if not contracts_dir.is_dir():
        raise ArtifactReadError(f"Contracts directory not found: {contracts_dir}")

    sources = sorted(p for p in contracts_dir.iterdir() if p.suffix == SOURCE_SUFFIX)
    if not sources:
        logger.warning("no %s files in %s", SOURCE_SUFFIX, contracts_dir)

    for source in sources:
        if compile:
            logger.info("compiling %s", source.name)
            try:
                compile_contract(source, compiled_dir)
            except CompileError:
                logger.error("error - contract %s failed to compile", source.stem)
                raise
        yield read_artifact(source.stem, compiled_dir)
