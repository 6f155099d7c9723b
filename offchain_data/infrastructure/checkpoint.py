"""File Checkpointer: persists how far replication has progressed through the ledger.

Invariants:
    - block_number is the next block to process; transaction_id is the last transaction
      already stored from that block ("" when none)
    - Saved as {"blockNumber": n, "transactionId": "..."}
    - Writes go to a temp file then os.replace: a crash leaves the old or new checkpoint,
      never a torn one
    - Missing file means start from block 0; a corrupt file (bad JSON, bad UTF-8,
      out-of-range values) raises CheckpointError

Design Decisions:
    - Pydantic model for the file format: the same camelCase aliasing as ledger writes
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from offchain_data.core.domain_types import BlockNumber, TransactionId
from offchain_data.core.errors import CheckpointError

logger = logging.getLogger(__name__)


class CheckpointState(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    block_number: int = Field(default=0, ge=0)
    transaction_id: str = ""


class FileCheckpointer:
    """Checkpoint stored as a small JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._state = self._load()

    @property
    def block_number(self) -> BlockNumber:
        return BlockNumber(self._state.block_number)

    @property
    def transaction_id(self) -> TransactionId:
        return TransactionId(self._state.transaction_id)

    def checkpoint_transaction(self, block_number: BlockNumber, transaction_id: TransactionId) -> None:
        self._save(CheckpointState(block_number=block_number, transaction_id=transaction_id))

    def checkpoint_block(self, block_number: BlockNumber) -> None:
        self._save(CheckpointState(block_number=block_number + 1))

    def _load(self) -> CheckpointState:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return CheckpointState()
        except OSError as e:
            raise CheckpointError(str(e), str(self.path)) from e
        try:
            state = CheckpointState.model_validate_json(raw)
        except ValidationError as e:
            raise CheckpointError("corrupt checkpoint file", str(self.path)) from e
        logger.info(
            "Resuming from checkpoint",
            extra={"block_number": state.block_number, "transaction_id": state.transaction_id or None},
        )
        return state

    def _save(self, state: CheckpointState) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_text(state.model_dump_json(by_alias=True), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise CheckpointError(str(e), str(self.path)) from e
        self._state = state
