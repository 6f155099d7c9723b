"""Read/Write Sets: public model of the keys a transaction read and wrote, per namespace.

Invariants:
    - Namespaces keep the order of TxReadWriteSet.ns_rwset
    - Reads and writes keep the order the chaincode executed them (replay determinism)
    - A namespace whose KVRWSet bytes are malformed fails the decode (stage "kv_rwset")

Design Decisions:
    - Frozen dataclasses with tuple fields: decoded transactions are immutable
    - Version is None when the key did not exist at read time (no version on the wire)
"""

from dataclasses import dataclass

from google.protobuf.message import Message

from offchain_data.core import wire_schema
from offchain_data.core.domain_types import Namespace
from offchain_data.core.errors import ErrorContext
from offchain_data.core.unmarshal import unmarshal


@dataclass(frozen=True)
class Version:
    block_num: int
    tx_num: int


@dataclass(frozen=True)
class KVRead:
    key: str
    version: Version | None = None


@dataclass(frozen=True)
class KVWrite:
    key: str
    value: bytes = b""
    is_delete: bool = False


@dataclass(frozen=True)
class NamespaceReadWriteSet:
    """Reads and writes of one transaction inside one namespace."""
    namespace: Namespace
    reads: tuple[KVRead, ...] = ()
    writes: tuple[KVWrite, ...] = ()


class ReadWriteSet:
    """One chaincode action's TxReadWriteSet."""

    def __init__(self, tx_read_write_set: Message):
        self._read_write_set = tx_read_write_set

    def namespace_read_write_sets(self) -> list[NamespaceReadWriteSet]:
        return [
            _parse_namespace(ns_rwset) for ns_rwset in self._read_write_set.ns_rwset
        ]

    def to_proto(self) -> Message:
        return self._read_write_set


def parse_read_write_set(tx_read_write_set: Message) -> ReadWriteSet:
    return ReadWriteSet(tx_read_write_set)


def _parse_namespace(ns_rwset: Message) -> NamespaceReadWriteSet:
    kv_rwset = unmarshal(
        wire_schema.KVRWSet, ns_rwset.rwset, "kv_rwset",
        ErrorContext(namespace=ns_rwset.namespace),
    )
    return NamespaceReadWriteSet(
        namespace=Namespace(ns_rwset.namespace),
        reads=tuple(_parse_read(read) for read in kv_rwset.reads),
        writes=tuple(
            KVWrite(key=write.key, value=write.value, is_delete=write.is_delete)
            for write in kv_rwset.writes
        ),
    )


def _parse_read(read: Message) -> KVRead:
    if not read.HasField("version"):
        return KVRead(key=read.key)
    return KVRead(
        key=read.key,
        version=Version(block_num=read.version.block_num, tx_num=read.version.tx_num),
    )
