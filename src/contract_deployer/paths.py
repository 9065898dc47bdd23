"""Path management utilities for contract-deployer."""

from pathlib import Path
from typing import Optional, Union

from .constants import BYTECODE_SUFFIX, INTERFACE_SUFFIX


def get_default_root() -> Path:
    """
    Get default project root (current working directory).

    Returns:
        Path to ./
    """
    return Path.cwd()


def get_default_paths(root: Optional[Union[Path, str]] = None) -> tuple[Path, Path, Path]:
    """
    Get default input/output paths.

    Args:
        root: Custom project directory (defaults to ./)

    Returns:
        Tuple of (contracts_dir, compiled_dir, output_path)
    """
    if root is None:
        root = get_default_root()
    else:
        root = Path(root).absolute()

    contracts_dir = root / "contracts"
    compiled_dir = root / "compiled-contracts"
    output_path = root / "output.json"

    return (contracts_dir, compiled_dir, output_path)


def get_artifact_paths(name: str, compiled_dir: Union[Path, str]) -> tuple[Path, Path]:
    """
    Get the solc output files for a contract.

    Returns:
        Tuple of (bytecode_path, interface_path)
    """
    compiled_dir = Path(compiled_dir)
    return (compiled_dir / f"{name}{BYTECODE_SUFFIX}", compiled_dir / f"{name}{INTERFACE_SUFFIX}")
