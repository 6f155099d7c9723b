"""Identity: the submitting creator of a transaction, decoded from the signature header.

Invariants:
    - Identity is opaque to the decoders: attached to a Transaction, never inspected
    - Malformed creator bytes raise DecodeError (stage "creator"), never a blank Identity

Design Decisions:
    - Frozen dataclass over the raw SerializedIdentity message: hashable, comparable,
      and callers do not need the wire schema to read msp_id/credentials
    - No certificate parsing here: credential verification belongs to the identity service
"""

from dataclasses import dataclass

from offchain_data.core import wire_schema
from offchain_data.core.unmarshal import unmarshal


@dataclass(frozen=True)
class Identity:
    """Credential subject: organization MSP id plus certificate or key material."""
    msp_id: str
    credentials: bytes


def decode_identity(creator: bytes) -> Identity:
    serialized = unmarshal(wire_schema.SerializedIdentity, creator, "creator")
    return Identity(msp_id=serialized.mspid, credentials=serialized.id_bytes)
