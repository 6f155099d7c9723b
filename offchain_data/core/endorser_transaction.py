"""Endorser Transaction: unwraps each action's nested blobs down to its read/write set.

Invariants:
    - Stages run strictly in order per action:
        action payload -> endorsed action -> proposal response payload
        -> chaincode action -> TxReadWriteSet -> NamespaceReadWriteSet
    - Malformed bytes at stages 1, 3, 4 raise DecodeError; an absent endorsed action
      raises MissingFieldError. Either aborts the whole transaction.
    - Results bytes that fail to parse as TxReadWriteSet are skipped, not fatal:
      the action produced no off-chain-relevant writes
    - Output order is action order, then namespace order within each action

Design Decisions:
    - One method per stage, each mapping a list to a list: a stage never sees
      data produced by a later stage
    - No caching: read_write_sets() recomputes deterministically on every call
"""

import logging

from google.protobuf.message import Message

from offchain_data.core import wire_schema
from offchain_data.core.errors import DecodeError, ErrorContext, MissingFieldError
from offchain_data.core.read_write_set import ReadWriteSet, parse_read_write_set
from offchain_data.core.unmarshal import unmarshal

logger = logging.getLogger(__name__)


class EndorserTransaction:
    """Decoded `protos.Transaction` carried in an endorser payload's data."""

    def __init__(self, transaction: Message, transaction_id: str | None = None):
        self._transaction = transaction
        self._transaction_id = transaction_id

    def read_write_sets(self) -> list[ReadWriteSet]:
        action_payloads = self._unmarshal_chaincode_action_payloads()
        endorsed_actions = self._extract_chaincode_endorsed_actions(action_payloads)
        response_payloads = self._unmarshal_proposal_response_payloads(endorsed_actions)
        chaincode_actions = self._unmarshal_chaincode_actions(response_payloads)
        tx_read_write_sets = self._unmarshal_tx_read_write_sets(chaincode_actions)
        return [parse_read_write_set(rwset) for rwset in tx_read_write_sets]

    def to_proto(self) -> Message:
        return self._transaction

    def _context(self) -> ErrorContext:
        return ErrorContext(transaction_id=self._transaction_id)

    def _unmarshal_chaincode_action_payloads(self) -> list[Message]:
        return [
            unmarshal(
                wire_schema.ChaincodeActionPayload, action.payload,
                "chaincode_action_payload", self._context(),
            )
            for action in self._transaction.actions
        ]

    def _extract_chaincode_endorsed_actions(self, action_payloads: list[Message]) -> list[Message]:
        result = []
        for payload in action_payloads:
            if not payload.HasField("action"):
                raise MissingFieldError(
                    "missing chaincode endorsed action", "action", self._context(),
                )
            result.append(payload.action)
        return result

    def _unmarshal_proposal_response_payloads(self, endorsed_actions: list[Message]) -> list[Message]:
        return [
            unmarshal(
                wire_schema.ProposalResponsePayload,
                endorsed_action.proposal_response_payload,
                "proposal_response_payload", self._context(),
            )
            for endorsed_action in endorsed_actions
        ]

    def _unmarshal_chaincode_actions(self, response_payloads: list[Message]) -> list[Message]:
        return [
            unmarshal(
                wire_schema.ChaincodeAction, response_payload.extension,
                "chaincode_action", self._context(),
            )
            for response_payload in response_payloads
        ]

    def _unmarshal_tx_read_write_sets(self, chaincode_actions: list[Message]) -> list[Message]:
        result = []
        for index, chaincode_action in enumerate(chaincode_actions):
            try:
                result.append(unmarshal(
                    wire_schema.TxReadWriteSet, chaincode_action.results,
                    "tx_read_write_set", self._context(),
                ))
            except DecodeError as e:
                logger.debug(
                    "Skipping action %d without a read/write set: %s", index, e.message,
                    extra={"transaction_id": self._transaction_id},
                )
        return result


def parse_endorser_transaction(
    data: bytes, transaction_id: str | None = None,
) -> EndorserTransaction:
    transaction = unmarshal(
        wire_schema.Transaction, data, "endorser_transaction",
        ErrorContext(transaction_id=transaction_id),
    )
    return EndorserTransaction(transaction, transaction_id)
