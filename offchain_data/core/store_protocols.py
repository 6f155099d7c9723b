"""Boundary Protocols: contracts between the replication service and its adapters.

Invariants:
    - Services depend on these Protocols, never on concrete file-backed classes
    - OffChainStore.apply returns False only for a recoverable (retryable) failure;
      fatal failures raise

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import Protocol

from offchain_data.core.domain_types import BlockNumber, TransactionId
from offchain_data.core.ledger_update import LedgerUpdate


class OffChainStore(Protocol):
    """Contract for the off-chain write log."""
    def apply(self, update: LedgerUpdate) -> bool: ...


class Checkpointer(Protocol):
    """Contract for replication progress persistence."""
    @property
    def block_number(self) -> BlockNumber: ...
    @property
    def transaction_id(self) -> TransactionId: ...
    def checkpoint_transaction(self, block_number: BlockNumber, transaction_id: TransactionId) -> None: ...
    def checkpoint_block(self, block_number: BlockNumber) -> None: ...
