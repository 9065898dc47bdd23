"""Unit tests for deployment record persistence."""

import json
from pathlib import Path

import pytest

from contract_deployer.exceptions import RecordWriteError
from contract_deployer.records import load_record, save_record
from contract_deployer.types import DeploymentRecord

RECORD = DeploymentRecord(
    value=42,
    deployer_address="0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
    contract_address="0x5FbDB2315678afecb367f032d93F642f64180aa3",
)


class TestSaveRecord:
    """Test the save_record function."""

    def test_writes_string_fields(self, tmp_path: Path):
        output = tmp_path / "output.json"
        save_record(RECORD, output)

        data = json.loads(output.read_text())
        assert data == {
            "getUint256Value": "42",
            "deployerAddress": "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
            "contractAddress": "0x5FbDB2315678afecb367f032d93F642f64180aa3",
        }

    def test_large_value_is_exact(self, tmp_path: Path):
        output = tmp_path / "output.json"
        save_record(DeploymentRecord(2**256 - 1, "0xa", "0xb"), output)

        assert json.loads(output.read_text())["getUint256Value"] == str(2**256 - 1)

    def test_creates_parent_directories(self, tmp_path: Path):
        output = tmp_path / "nested" / "dir" / "output.json"
        save_record(RECORD, output)
        assert output.exists()

    def test_overwrites_previous_record(self, tmp_path: Path):
        output = tmp_path / "output.json"
        save_record(DeploymentRecord(1, "0xa", "0xb"), output)
        save_record(RECORD, output)

        assert load_record(output) == RECORD

    def test_output_is_a_directory(self, tmp_path: Path):
        output = tmp_path / "output.json"
        output.mkdir()

        with pytest.raises(RecordWriteError, match="output.json") as exc_info:
            save_record(RECORD, output)

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_parent_is_a_file(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(RecordWriteError):
            save_record(RECORD, blocker / "output.json")


class TestLoadRecord:
    def test_round_trip(self, tmp_path: Path):
        output = tmp_path / "output.json"
        save_record(RECORD, output)
        assert load_record(output) == RECORD

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_record(tmp_path / "absent.json")

    def test_missing_field(self, tmp_path: Path):
        output = tmp_path / "output.json"
        output.write_text(json.dumps({"getUint256Value": "1"}))
        with pytest.raises(KeyError):
            load_record(output)
