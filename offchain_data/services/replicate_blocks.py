"""Block Replicator: moves the writes of committed transactions into the off-chain store.

Invariants:
    - Blocks below the checkpoint are skipped; inside the checkpoint block, transactions
      up to and including the checkpointed one are skipped
    - A block above the checkpoint is still replicated, with a warning for the gap
    - Invalid transactions (validation code != VALID) never reach the store
    - Each update is retried while the store reports a recoverable failure, at most
      max_write_attempts times, then ReplicationRetriesExhaustedError
    - Checkpoint advances only after the store accepted the transaction's writes
      (at-least-once delivery)

Design Decisions:
    - Store and checkpointer injected as Protocols: the service has no file IO of its own
    - Immediate retry without backoff: simulated failures clear on the next call
"""

import logging

from offchain_data.core.block import Block
from offchain_data.core.domain_types import BlockNumber
from offchain_data.core.errors import ErrorContext, ReplicationRetriesExhaustedError
from offchain_data.core.ledger_update import LedgerUpdate, build_ledger_update
from offchain_data.core.store_protocols import Checkpointer, OffChainStore
from offchain_data.core.transaction import Transaction

logger = logging.getLogger(__name__)


class BlockReplicator:
    """Replicates blocks one at a time, in ledger order."""

    def __init__(
        self,
        store: OffChainStore,
        checkpointer: Checkpointer,
        max_write_attempts: int = 3,
    ):
        self.store = store
        self.checkpointer = checkpointer
        self.max_write_attempts = max_write_attempts

    def process_block(self, block: Block) -> int:
        """Replicate one block; returns the number of writes stored."""
        if block.number < self.checkpointer.block_number:
            logger.info("Skipping replicated block", extra={"block_number": block.number})
            return 0
        if block.number > self.checkpointer.block_number:
            logger.warning(
                "Block gap: expected block %d, got %d", self.checkpointer.block_number, block.number,
                extra={"block_number": block.number},
            )

        stored = 0
        for transaction in self._pending_transactions(block):
            stored += self._process_transaction(block.number, transaction)

        self.checkpointer.checkpoint_block(block.number)
        logger.info(
            "Block replicated", extra={"block_number": block.number, "writes": stored},
        )
        return stored

    def _pending_transactions(self, block: Block) -> list[Transaction]:
        transactions = block.transactions()
        last_stored = ""
        if block.number == self.checkpointer.block_number:
            last_stored = self.checkpointer.transaction_id
        if not last_stored:
            return transactions
        ids = [transaction.transaction_id() for transaction in transactions]
        if last_stored not in ids:
            return transactions
        return transactions[ids.index(last_stored) + 1:]

    def _process_transaction(self, block_number: BlockNumber, transaction: Transaction) -> int:
        if not transaction.is_valid():
            logger.info(
                "Skipping invalid transaction (code %d)", transaction.validation_code(),
                extra={"block_number": block_number, "transaction_id": transaction.transaction_id()},
            )
            return 0

        update = build_ledger_update(block_number, transaction)
        if update.writes:
            self._apply_with_retry(update)
        self.checkpointer.checkpoint_transaction(block_number, update.transaction_id)
        return len(update.writes)

    def _apply_with_retry(self, update: LedgerUpdate) -> None:
        for attempt in range(1, self.max_write_attempts + 1):
            if self.store.apply(update):
                return
            logger.info(
                "Store rejected ledger update, retrying",
                extra={
                    "attempt": attempt,
                    "block_number": update.block_number,
                    "transaction_id": update.transaction_id,
                },
            )
        raise ReplicationRetriesExhaustedError(
            self.max_write_attempts,
            ErrorContext(block_number=update.block_number, transaction_id=update.transaction_id),
        )
