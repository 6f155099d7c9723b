"""Ledger Update: verifies flattening of a transaction into store writes."""

import json

from offchain_data.core.domain_types import BlockNumber, TransactionId
from offchain_data.core.envelope import decode_envelope
from offchain_data.core.ledger_update import LedgerUpdate, Write, build_ledger_update
from offchain_data.core.transaction import decode_transaction

from tests import wire_builders as wb


def _transaction(action_payloads, **kwargs):
    return decode_transaction(decode_envelope(wb.transaction_envelope(action_payloads, **kwargs)))


def test_build_tags_writes_with_channel_and_namespace():
    transaction = _transaction(
        [wb.action_writing("assets", [("key1", b"valueA"), ("key2", b"", True)])],
        tx_id="tx7", channel_id="trade",
    )
    update = build_ledger_update(BlockNumber(3), transaction)
    assert update.block_number == BlockNumber(3)
    assert update.transaction_id == TransactionId("tx7")
    assert update.writes == [
        Write(channel_name="trade", namespace="assets", key="key1", value="valueA"),
        Write(channel_name="trade", namespace="assets", key="key2", is_delete=True),
    ]


def test_build_preserves_order_across_actions():
    transaction = _transaction([
        wb.action_writing("b", [("1", b"x")]),
        wb.action_writing("a", [("2", b"y")]),
    ])
    update = build_ledger_update(0, transaction)
    assert [(w.namespace, w.key) for w in update.writes] == [("b", "1"), ("a", "2")]


def test_build_skips_system_namespaces():
    transaction = _transaction([
        wb.action_writing("_lifecycle", [("namespaces/fields/basic", b"def")]),
        wb.action_writing("assets", [("key1", b"valueA")]),
    ])
    update = build_ledger_update(0, transaction)
    assert [w.namespace for w in update.writes] == ["assets"]


def test_build_replaces_undecodable_value_bytes():
    transaction = _transaction([wb.action_writing("assets", [("bin", b"\xff\x00")])])
    (write,) = build_ledger_update(0, transaction).writes
    assert write.value == "\ufffd\x00"


def test_write_record_uses_camel_case_keys():
    record = Write(channel_name="c", namespace="n", key="k", value="v").to_record()
    assert json.loads(record) == {
        "channelName": "c", "namespace": "n", "key": "k", "isDelete": False, "value": "v",
    }
    assert "\n" not in record


def test_ledger_update_defaults_to_no_writes():
    assert LedgerUpdate(block_number=1, transaction_id="t").writes == []
