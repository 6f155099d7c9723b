"""Flat File Store: appends ledger writes to an append-only JSON-lines file.

Invariants:
    - The failure simulator is consulted before any IO; a simulated failure writes nothing
    - One JSON record per write, newline-terminated, in write order
    - All records of an update go out in a single write() call
    - File opened in append/create mode and closed on every exit path
    - OSError maps to StoreWriteError (critical, never retried here)

Design Decisions:
    - Simulated failures logged with the "[expected error]" prefix and reported by
      returning False: the caller decides whether to retry
    - A single write() call narrows, but does not close, the partial-write window;
      a plain append is not atomic at the filesystem level
"""

import logging
from pathlib import Path

from offchain_data.core.errors import (
    ErrorContext, SimulatedWriteFailureError, StoreWriteError,
)
from offchain_data.core.failure_simulation import FailureSimulator
from offchain_data.core.ledger_update import LedgerUpdate

logger = logging.getLogger(__name__)


class FlatFileStore:
    """Off-chain store backed by a local append-only file."""

    def __init__(self, store_file: Path, failure_simulator: FailureSimulator | None = None):
        self.store_file = Path(store_file)
        self.failure_simulator = failure_simulator or FailureSimulator(0)

    def apply(self, update: LedgerUpdate) -> bool:
        """Append the update's writes. Returns False on a simulated failure."""
        try:
            self.failure_simulator.check()
        except SimulatedWriteFailureError as e:
            logger.warning(
                f"[expected error]: {e.message}",
                extra={
                    "error_code": e.code,
                    "block_number": update.block_number,
                    "transaction_id": update.transaction_id,
                },
            )
            return False

        records = [write.to_record() for write in update.writes]
        if not records:
            return True

        try:
            with self.store_file.open("a", encoding="utf-8") as f:
                f.write("\n".join(records) + "\n")
        except OSError as e:
            raise StoreWriteError(
                str(e), str(self.store_file),
                ErrorContext(
                    block_number=update.block_number,
                    transaction_id=update.transaction_id,
                ),
            ) from e

        logger.info(
            "Stored ledger writes",
            extra={
                "block_number": update.block_number,
                "transaction_id": update.transaction_id,
                "writes": len(records),
            },
        )
        return True
