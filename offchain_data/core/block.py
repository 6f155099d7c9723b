"""Block Decoder: splits a committed block into its endorser transactions.

Invariants:
    - transactions() keeps block order and yields only ENDORSER_TRANSACTION envelopes
      (config and other system envelopes carry no chaincode writes)
    - Each transaction's validation code comes from the block's transactions filter,
      one byte per envelope; a missing byte means NOT_VALIDATED
    - Malformed block or envelope bytes raise DecodeError for the whole block

Design Decisions:
    - Envelopes decoded once at decode_block: a Block never exposes half-decoded data
"""

from google.protobuf.message import Message

from offchain_data.core import wire_schema
from offchain_data.core.domain_types import (
    BlockMetadataIndex, BlockNumber, ChannelName, TxValidationCode,
)
from offchain_data.core.envelope import Payload, decode_envelope
from offchain_data.core.errors import OffChainDataError
from offchain_data.core.transaction import Transaction, decode_transaction
from offchain_data.core.unmarshal import unmarshal


class Block:
    """A decoded block: number, envelope payloads, and their validation codes."""

    def __init__(self, block: Message, payloads: list[Payload]):
        self._block = block
        self._payloads = payloads

    @property
    def number(self) -> BlockNumber:
        return BlockNumber(self._block.header.number)

    @property
    def channel_name(self) -> ChannelName:
        if not self._payloads:
            return ChannelName("")
        return ChannelName(self._payloads[0].channel_header().channel_id)

    def transaction_validation_codes(self) -> list[int]:
        return _validation_codes(self._block, len(self._block.data.data))

    def transactions(self) -> list[Transaction]:
        return [
            decode_transaction(payload)
            for payload in self._payloads
            if payload.is_endorser_transaction()
        ]

    def to_proto(self) -> Message:
        return self._block


def decode_block(raw_block: bytes) -> Block:
    block = unmarshal(wire_schema.Block, raw_block, "block")
    codes = _validation_codes(block, len(block.data.data))
    payloads = []
    for index, envelope_bytes in enumerate(block.data.data):
        try:
            payloads.append(decode_envelope(envelope_bytes, codes[index]))
        except OffChainDataError as e:
            e.context.block_number = block.header.number
            raise
    return Block(block, payloads)


def _validation_codes(block: Message, envelope_count: int) -> list[int]:
    metadata = block.metadata.metadata
    tx_filter = b""
    if len(metadata) > BlockMetadataIndex.TRANSACTIONS_FILTER:
        tx_filter = metadata[BlockMetadataIndex.TRANSACTIONS_FILTER]
    return [
        tx_filter[i] if i < len(tx_filter) else TxValidationCode.NOT_VALIDATED
        for i in range(envelope_count)
    ]
