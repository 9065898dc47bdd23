"""Deployment record persistence for contract-deployer."""

import json
from pathlib import Path

from .exceptions import RecordWriteError
from .types import DeploymentRecord


def save_record(record: DeploymentRecord, output_path: Path) -> None:
    """
    Write a deployment record as indented JSON, replacing any previous record.

    Args:
        record: Record to write
        output_path: Path to output.json

    Raises:
        RecordWriteError: If the file or its parent directories cannot be written

    Creates parent directories if they don't exist.
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(record.to_dict(), f, indent=2)
    except OSError as e:
        raise RecordWriteError(f"Failed to write record to {output_path}: {e}") from e


def load_record(output_path: Path) -> DeploymentRecord:
    """
    Read a deployment record written by save_record().

    Raises:
        FileNotFoundError: If no record has been written
        KeyError: If a field is missing
    """
    with open(output_path) as f:
        return DeploymentRecord.from_dict(json.load(f))
