"""File Checkpointer: verifies load, save and corruption handling."""

import json

import pytest

from offchain_data.core.errors import CheckpointError
from offchain_data.infrastructure.checkpoint import FileCheckpointer


def test_missing_file_starts_at_block_zero(tmp_path):
    checkpointer = FileCheckpointer(tmp_path / "checkpoint.json")
    assert checkpointer.block_number == 0
    assert checkpointer.transaction_id == ""


def test_checkpoint_transaction_persists(tmp_path):
    path = tmp_path / "checkpoint.json"
    FileCheckpointer(path).checkpoint_transaction(5, "tx3")
    assert json.loads(path.read_text()) == {"blockNumber": 5, "transactionId": "tx3"}
    reloaded = FileCheckpointer(path)
    assert reloaded.block_number == 5
    assert reloaded.transaction_id == "tx3"


def test_checkpoint_block_advances_and_clears_transaction(tmp_path):
    path = tmp_path / "checkpoint.json"
    checkpointer = FileCheckpointer(path)
    checkpointer.checkpoint_transaction(5, "tx3")
    checkpointer.checkpoint_block(5)
    assert checkpointer.block_number == 6
    assert checkpointer.transaction_id == ""
    assert not (tmp_path / "checkpoint.json.tmp").exists()


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "checkpoint.json"
    path.write_text("{not json")
    with pytest.raises(CheckpointError):
        FileCheckpointer(path)


def test_negative_block_number_rejected(tmp_path):
    path = tmp_path / "checkpoint.json"
    path.write_text(json.dumps({"blockNumber": -1, "transactionId": ""}))
    with pytest.raises(CheckpointError):
        FileCheckpointer(path)


def test_unwritable_location_raises(tmp_path):
    checkpointer = FileCheckpointer(tmp_path / "missing-dir" / "checkpoint.json")
    with pytest.raises(CheckpointError):
        checkpointer.checkpoint_block(0)


def test_non_utf8_file_raises(tmp_path):
    path = tmp_path / "checkpoint.json"
    path.write_bytes(b"\xff\xfe{}")
    with pytest.raises(CheckpointError) as exc:
        FileCheckpointer(path)
    assert exc.value.path == str(path)
