"""Domain Types: ledger constants and rich types that replace bare primitives.

Invariants:
    - TxValidationCode.VALID (0) is the only code that marks a committed transaction
    - HeaderType values match the network's channel header `type` field
    - BlockMetadataIndex.TRANSACTIONS_FILTER holds one validation code byte per envelope
    - BlockNumber, TransactionId, ChannelName, Namespace wrap ledger primitives at every
      public boundary (decoders, ledger updates, checkpoints)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - IntEnum for wire constants: compares equal to raw ints read from protobuf fields
"""

from enum import IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

BlockNumber = NewType("BlockNumber", int)
TransactionId = NewType("TransactionId", str)
ChannelName = NewType("ChannelName", str)
Namespace = NewType("Namespace", str)


# ─── Wire Enums ──────────────────────────────────────────────────

class HeaderType(IntEnum):
    """Channel header `type` values."""
    MESSAGE = 0
    CONFIG = 1
    CONFIG_UPDATE = 2
    ENDORSER_TRANSACTION = 3
    ORDERER_TRANSACTION = 4
    DELIVER_SEEK_INFO = 5
    CHAINCODE_PACKAGE = 6


class TxValidationCode(IntEnum):
    """Validation status assigned to a transaction at commit time."""
    VALID = 0
    NIL_ENVELOPE = 1
    BAD_PAYLOAD = 2
    BAD_COMMON_HEADER = 3
    BAD_CREATOR_SIGNATURE = 4
    INVALID_ENDORSER_TRANSACTION = 5
    INVALID_CONFIG_TRANSACTION = 6
    UNSUPPORTED_TX_PAYLOAD = 7
    BAD_PROPOSAL_TXID = 8
    DUPLICATE_TXID = 9
    ENDORSEMENT_POLICY_FAILURE = 10
    MVCC_READ_CONFLICT = 11
    PHANTOM_READ_CONFLICT = 12
    UNKNOWN_TX_TYPE = 13
    TARGET_CHAIN_NOT_FOUND = 14
    MARSHAL_TX_ERROR = 15
    NIL_TXACTION = 16
    EXPIRED_CHAINCODE = 17
    CHAINCODE_VERSION_CONFLICT = 18
    BAD_HEADER_EXTENSION = 19
    BAD_CHANNEL_HEADER = 20
    BAD_RESPONSE_PAYLOAD = 21
    BAD_RWSET = 22
    ILLEGAL_WRITESET = 23
    INVALID_WRITESET = 24
    INVALID_CHAINCODE = 25
    NOT_VALIDATED = 254
    INVALID_OTHER_REASON = 255


class BlockMetadataIndex(IntEnum):
    """Positions inside `common.BlockMetadata.metadata`."""
    SIGNATURES = 0
    LAST_CONFIG = 1
    TRANSACTIONS_FILTER = 2
    ORDERER = 3
    COMMIT_HASH = 4


# Chaincodes run by the peer itself; their writes are ledger bookkeeping.
SYSTEM_NAMESPACES: frozenset[str] = frozenset({
    "_lifecycle", "cscc", "escc", "lscc", "qscc", "vscc",
})
