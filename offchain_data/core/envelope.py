"""Envelope Decoder: unwraps a signed envelope into its payload, header and body.

Invariants:
    - decode_envelope is pure: identical bytes yield structurally identical payloads
    - Envelope, payload, channel header and signature header are all parsed up front;
      any malformed layer raises DecodeError before a Payload is returned
    - to_proto() returns the parsed common.Payload, whose serialization equals the
      envelope's payload bytes

Design Decisions:
    - Validation code passed in, not read from the envelope: it lives in the block's
      transactions filter, so lone envelopes default to VALID
    - Endorser transaction body decoded on demand: config envelopes carry other bodies
"""

from google.protobuf.message import Message

from offchain_data.core import wire_schema
from offchain_data.core.domain_types import HeaderType, TxValidationCode
from offchain_data.core.endorser_transaction import EndorserTransaction, parse_endorser_transaction
from offchain_data.core.unmarshal import unmarshal


class Payload:
    """Decoded envelope body with its headers."""

    def __init__(
        self,
        payload: Message,
        channel_header: Message,
        signature_header: Message,
        validation_code: int = TxValidationCode.VALID,
    ):
        self._payload = payload
        self._channel_header = channel_header
        self._signature_header = signature_header
        self._validation_code = int(validation_code)

    def channel_header(self) -> Message:
        return self._channel_header

    def signature_header(self) -> Message:
        return self._signature_header

    def is_endorser_transaction(self) -> bool:
        return self._channel_header.type == HeaderType.ENDORSER_TRANSACTION

    def endorser_transaction(self) -> EndorserTransaction:
        return parse_endorser_transaction(self._payload.data, self._channel_header.tx_id)

    def transaction_validation_code(self) -> int:
        return self._validation_code

    def is_valid(self) -> bool:
        return self._validation_code == TxValidationCode.VALID

    def to_proto(self) -> Message:
        return self._payload


def decode_envelope(
    raw_envelope: bytes, validation_code: int = TxValidationCode.VALID,
) -> Payload:
    envelope = unmarshal(wire_schema.Envelope, raw_envelope, "envelope")
    return decode_payload(envelope.payload, validation_code)


def decode_payload(
    payload_bytes: bytes, validation_code: int = TxValidationCode.VALID,
) -> Payload:
    payload = unmarshal(wire_schema.Payload, payload_bytes, "payload")
    channel_header = unmarshal(
        wire_schema.ChannelHeader, payload.header.channel_header, "channel_header",
    )
    signature_header = unmarshal(
        wire_schema.SignatureHeader, payload.header.signature_header, "signature_header",
    )
    return Payload(payload, channel_header, signature_header, validation_code)
