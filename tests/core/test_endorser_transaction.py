"""Action / Read-Write-Set Decoder: verifies the staged unwrap chain and its error policy.

Tests:
    - Malformed action payload, proposal response payload, chaincode action: DecodeError
    - Absent endorsed action: MissingFieldError, distinct from DecodeError
    - Malformed results blob: action skipped, no error
    - Namespace, read and write order preserved; read versions decoded
"""

import logging

import pytest

from offchain_data.core.endorser_transaction import parse_endorser_transaction
from offchain_data.core.errors import DecodeError, MissingFieldError
from offchain_data.core.read_write_set import KVRead, KVWrite, Version

from tests import wire_builders as wb


def _namespace_sets(action_payloads):
    endorser = parse_endorser_transaction(wb.endorser_transaction(action_payloads), "tx1")
    return [
        ns
        for rwset in endorser.read_write_sets()
        for ns in rwset.namespace_read_write_sets()
    ]


def test_no_actions_yield_no_sets():
    assert _namespace_sets([]) == []


def test_malformed_action_payload_is_fatal():
    with pytest.raises(DecodeError) as exc:
        _namespace_sets([wb.action_writing("assets", [("k", b"v")]), wb.MALFORMED])
    assert exc.value.stage == "chaincode_action_payload"
    assert exc.value.context.transaction_id == "tx1"


def test_missing_endorsed_action_is_structural_error():
    with pytest.raises(MissingFieldError) as exc:
        _namespace_sets([wb.action_payload(None)])
    assert exc.value.code == "MISSING_FIELD"
    assert exc.value.field_name == "action"
    assert not isinstance(exc.value, DecodeError)


def test_malformed_proposal_response_payload_is_fatal():
    with pytest.raises(DecodeError) as exc:
        _namespace_sets([wb.action_payload(wb.MALFORMED)])
    assert exc.value.stage == "proposal_response_payload"


def test_malformed_chaincode_action_is_fatal():
    with pytest.raises(DecodeError) as exc:
        _namespace_sets([wb.action_payload(wb.proposal_response_payload(wb.MALFORMED))])
    assert exc.value.stage == "chaincode_action"


def test_malformed_results_are_skipped(caplog):
    with caplog.at_level(logging.DEBUG, logger="offchain_data.core.endorser_transaction"):
        result = _namespace_sets([wb.action_with_results(wb.MALFORMED)])
    assert result == []
    assert "Skipping action 0" in caplog.text


def test_malformed_results_only_drop_their_own_action():
    result = _namespace_sets([
        wb.action_with_results(wb.MALFORMED),
        wb.action_writing("assets", [("key1", b"valueA")]),
        wb.action_with_results(wb.MALFORMED),
    ])
    assert [ns.namespace for ns in result] == ["assets"]


def test_empty_results_yield_no_namespaces():
    assert _namespace_sets([wb.action_with_results(b"")]) == []


def test_namespace_order_follows_source():
    results = wb.tx_rwset([
        ("zeta", wb.kv_rwset([("z", b"1")])),
        ("alpha", wb.kv_rwset([("a", b"2")])),
        ("mid", wb.kv_rwset()),
    ])
    result = _namespace_sets([wb.action_with_results(results)])
    assert [ns.namespace for ns in result] == ["zeta", "alpha", "mid"]
    assert result[2].writes == ()


def test_writes_keep_execution_order_and_delete_flag():
    result = _namespace_sets([
        wb.action_writing("assets", [("b", b"2"), ("a", b"1"), ("c", b"", True)]),
    ])
    assert result[0].writes == (
        KVWrite("b", b"2"),
        KVWrite("a", b"1"),
        KVWrite("c", b"", is_delete=True),
    )


def test_reads_decode_versions():
    result = _namespace_sets([
        wb.action_writing("assets", reads=[("key1", 5, 2), "fresh"]),
    ])
    assert result[0].reads == (
        KVRead("key1", Version(block_num=5, tx_num=2)),
        KVRead("fresh"),
    )


def test_malformed_kv_rwset_is_fatal():
    results = wb.tx_rwset([("assets", wb.MALFORMED)])
    with pytest.raises(DecodeError) as exc:
        _namespace_sets([wb.action_with_results(results)])
    assert exc.value.stage == "kv_rwset"
    assert exc.value.context.namespace == "assets"


def test_to_proto_returns_transaction_message():
    data = wb.endorser_transaction([wb.action_writing("assets", [("k", b"v")])])
    endorser = parse_endorser_transaction(data)
    assert endorser.to_proto().SerializeToString() == data
