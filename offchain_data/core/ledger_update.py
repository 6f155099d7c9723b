"""Ledger Update: the batch of key writes one transaction applies to the off-chain store.

Invariants:
    - Writes keep namespace order, then key order within each namespace
    - System chaincode namespaces (SYSTEM_NAMESPACES) never reach the store
    - Write serializes to one JSON object with camelCase keys
      (channelName, namespace, key, isDelete, value)

Design Decisions:
    - Pydantic models for the store boundary: JSON serialization and alias mapping
      without hand-written encoders
    - Values stored as UTF-8 text; undecodable bytes replaced rather than failing the batch
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from offchain_data.core.domain_types import (
    SYSTEM_NAMESPACES, BlockNumber, ChannelName, Namespace, TransactionId,
)
from offchain_data.core.transaction import Transaction


class Write(BaseModel):
    """One key-level write, tagged with where it happened."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    channel_name: ChannelName
    namespace: Namespace
    key: str
    is_delete: bool = False
    value: str = ""

    def to_record(self) -> str:
        return self.model_dump_json(by_alias=True)


class LedgerUpdate(BaseModel):
    """Writes of one transaction, consumed once by the store."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    block_number: BlockNumber
    transaction_id: TransactionId
    writes: list[Write] = []


def build_ledger_update(block_number: BlockNumber, transaction: Transaction) -> LedgerUpdate:
    channel_name = transaction.channel_id()
    writes = [
        Write(
            channel_name=channel_name,
            namespace=ns_rwset.namespace,
            key=write.key,
            is_delete=write.is_delete,
            value=write.value.decode("utf-8", errors="replace"),
        )
        for ns_rwset in transaction.namespace_read_write_sets()
        if ns_rwset.namespace not in SYSTEM_NAMESPACES
        for write in ns_rwset.writes
    ]
    return LedgerUpdate(
        block_number=block_number,
        transaction_id=transaction.transaction_id(),
        writes=writes,
    )
