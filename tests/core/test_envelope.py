"""Envelope Decoder: verifies unwrapping of envelope, payload and headers.

Tests:
    - Headers exposed verbatim after decode
    - Re-serializing to_proto() reproduces the payload bytes exactly
    - Malformed envelope, payload, or header bytes raise DecodeError naming the stage
"""

import pytest

from offchain_data.core import wire_schema
from offchain_data.core.domain_types import HeaderType, TxValidationCode
from offchain_data.core.envelope import decode_envelope
from offchain_data.core.errors import DecodeError, ErrorSeverity

from tests import wire_builders as wb


def test_decode_exposes_channel_header():
    raw = wb.transaction_envelope([], tx_id="abc", channel_id="trade")
    payload = decode_envelope(raw)
    header = payload.channel_header()
    assert header.tx_id == "abc"
    assert header.channel_id == "trade"
    assert header.type == HeaderType.ENDORSER_TRANSACTION
    assert payload.is_endorser_transaction()


def test_decode_exposes_signature_header_creator():
    payload = decode_envelope(wb.transaction_envelope([]))
    assert payload.signature_header().creator == wb.creator()


def test_to_proto_round_trips_payload_bytes():
    payload_bytes = wb.payload(wb.endorser_transaction([wb.action_writing("assets", [("k", b"v")])]))
    payload = decode_envelope(wb.envelope(payload_bytes))
    assert payload.to_proto().SerializeToString() == payload_bytes


def test_decode_is_deterministic():
    raw = wb.transaction_envelope([wb.action_writing("assets", [("k", b"v")])])
    first = decode_envelope(raw)
    second = decode_envelope(raw)
    assert first.to_proto() == second.to_proto()
    assert first.channel_header() == second.channel_header()


def test_default_validation_code_is_valid():
    payload = decode_envelope(wb.transaction_envelope([]))
    assert payload.transaction_validation_code() == TxValidationCode.VALID
    assert payload.is_valid()


def test_explicit_validation_code_is_kept():
    payload = decode_envelope(
        wb.transaction_envelope([]), TxValidationCode.MVCC_READ_CONFLICT,
    )
    assert payload.transaction_validation_code() == 11
    assert not payload.is_valid()


def test_config_envelope_is_not_endorser_transaction():
    raw = wb.envelope(wb.payload(b"", header_type=HeaderType.CONFIG))
    assert not decode_envelope(raw).is_endorser_transaction()


def test_malformed_envelope_raises_decode_error():
    with pytest.raises(DecodeError) as exc:
        decode_envelope(wb.MALFORMED)
    assert exc.value.stage == "envelope"
    assert exc.value.severity == ErrorSeverity.CRITICAL
    assert not exc.value.recoverable


def test_malformed_payload_raises_decode_error():
    with pytest.raises(DecodeError) as exc:
        decode_envelope(wb.envelope(wb.MALFORMED))
    assert exc.value.stage == "payload"


def test_malformed_channel_header_raises_decode_error():
    message = wire_schema.Payload(data=b"")
    message.header.channel_header = wb.MALFORMED
    with pytest.raises(DecodeError) as exc:
        decode_envelope(wb.envelope(message.SerializeToString()))
    assert exc.value.stage == "channel_header"


def test_malformed_endorser_transaction_raises_on_access():
    payload = decode_envelope(wb.envelope(wb.payload(wb.MALFORMED, tx_id="tx9")))
    with pytest.raises(DecodeError) as exc:
        payload.endorser_transaction()
    assert exc.value.stage == "endorser_transaction"
    assert exc.value.context.transaction_id == "tx9"
