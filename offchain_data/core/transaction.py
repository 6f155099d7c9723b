"""Transaction Decoder: the public view of one decoded ledger transaction.

Invariants:
    - is_valid() is True iff validation_code() == TxValidationCode.VALID
    - namespace_read_write_sets() flattens per-action results in action order
    - creator() raises DecodeError on malformed creator bytes (never swallowed)
    - to_proto() returns the wire payload unchanged, for re-serialization or hashing

Design Decisions:
    - Thin facade over Payload: every accessor delegates, nothing is copied
    - Read/write sets recomputed per call (deterministic, no cache to invalidate)
"""

from datetime import datetime, timezone

from google.protobuf.message import Message

from offchain_data.core.domain_types import ChannelName, TransactionId
from offchain_data.core.envelope import Payload
from offchain_data.core.identity import Identity, decode_identity
from offchain_data.core.read_write_set import NamespaceReadWriteSet


class Transaction:
    """An endorser transaction with its channel metadata and commit status."""

    def __init__(self, payload: Payload):
        self._payload = payload

    def channel_header(self) -> Message:
        return self._payload.channel_header()

    def transaction_id(self) -> TransactionId:
        return TransactionId(self._payload.channel_header().tx_id)

    def channel_id(self) -> ChannelName:
        return ChannelName(self._payload.channel_header().channel_id)

    def timestamp(self) -> datetime:
        ts = self._payload.channel_header().timestamp
        return datetime.fromtimestamp(ts.seconds, tz=timezone.utc).replace(
            microsecond=ts.nanos // 1000,
        )

    def creator(self) -> Identity:
        return decode_identity(self._payload.signature_header().creator)

    def validation_code(self) -> int:
        return self._payload.transaction_validation_code()

    def is_valid(self) -> bool:
        return self._payload.is_valid()

    def namespace_read_write_sets(self) -> list[NamespaceReadWriteSet]:
        result = []
        for read_write_set in self._payload.endorser_transaction().read_write_sets():
            result.extend(read_write_set.namespace_read_write_sets())
        return result

    def to_proto(self) -> Message:
        return self._payload.to_proto()


def decode_transaction(payload: Payload) -> Transaction:
    return Transaction(payload)
