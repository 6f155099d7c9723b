"""Wire Schema: statically defined protobuf messages for every layer of a ledger block.

Invariants:
    - Field names, numbers and types match the network's published protos (SCHEMA_VERSION)
    - Schema lives in a private DescriptorPool: never clashes with other generated protos
    - Every nested blob (payload, action payload, extension, results, rwset) is a `bytes`
      field, so each layer is decoded explicitly by its own step

Design Decisions:
    - Descriptors declared as data and registered at import over protoc-generated
      *_pb2 modules: one reviewable table, no build step, and no dependency on the
      fabric-sdk-py distribution just for its generated protos
    - Enum-typed fields (TxReadWriteSet.data_model) declared as int32: identical varint
      encoding, and unknown values survive a round trip
    - Only the fields the replicator reads are declared; any others are kept as
      unknown fields and re-serialized unchanged
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory, timestamp_pb2

SCHEMA_VERSION = "fabric-protos-v2"

_FDP = descriptor_pb2.FieldDescriptorProto

_SCALARS: dict[str, int] = {
    "bytes": _FDP.TYPE_BYTES,
    "string": _FDP.TYPE_STRING,
    "bool": _FDP.TYPE_BOOL,
    "int32": _FDP.TYPE_INT32,
    "uint64": _FDP.TYPE_UINT64,
}

# package -> (file dependencies, {message: ((field, number, type), ...)})
# A type starting with "." is a message reference; "repeated " prefixes lists.
_PACKAGES: dict[str, tuple[tuple[str, ...], dict[str, tuple[tuple[str, int, str], ...]]]] = {
    "common": (("google/protobuf/timestamp.proto",), {
        "Envelope": (
            ("payload", 1, "bytes"),
            ("signature", 2, "bytes"),
        ),
        "Payload": (
            ("header", 1, ".common.Header"),
            ("data", 2, "bytes"),
        ),
        "Header": (
            ("channel_header", 1, "bytes"),
            ("signature_header", 2, "bytes"),
        ),
        "ChannelHeader": (
            ("type", 1, "int32"),
            ("version", 2, "int32"),
            ("timestamp", 3, ".google.protobuf.Timestamp"),
            ("channel_id", 4, "string"),
            ("tx_id", 5, "string"),
            ("epoch", 6, "uint64"),
            ("extension", 7, "bytes"),
            ("tls_cert_hash", 8, "bytes"),
        ),
        "SignatureHeader": (
            ("creator", 1, "bytes"),
            ("nonce", 2, "bytes"),
        ),
        "Block": (
            ("header", 1, ".common.BlockHeader"),
            ("data", 2, ".common.BlockData"),
            ("metadata", 3, ".common.BlockMetadata"),
        ),
        "BlockHeader": (
            ("number", 1, "uint64"),
            ("previous_hash", 2, "bytes"),
            ("data_hash", 3, "bytes"),
        ),
        "BlockData": (
            ("data", 1, "repeated bytes"),
        ),
        "BlockMetadata": (
            ("metadata", 1, "repeated bytes"),
        ),
    }),
    "msp": ((), {
        "SerializedIdentity": (
            ("mspid", 1, "string"),
            ("id_bytes", 2, "bytes"),
        ),
    }),
    "protos": ((), {
        "Transaction": (
            ("actions", 1, "repeated .protos.TransactionAction"),
        ),
        "TransactionAction": (
            ("header", 1, "bytes"),
            ("payload", 2, "bytes"),
        ),
        "ChaincodeActionPayload": (
            ("chaincode_proposal_payload", 1, "bytes"),
            ("action", 2, ".protos.ChaincodeEndorsedAction"),
        ),
        "ChaincodeEndorsedAction": (
            ("proposal_response_payload", 1, "bytes"),
            ("endorsements", 2, "repeated .protos.Endorsement"),
        ),
        "Endorsement": (
            ("endorser", 1, "bytes"),
            ("signature", 2, "bytes"),
        ),
        "ProposalResponsePayload": (
            ("proposal_hash", 1, "bytes"),
            ("extension", 2, "bytes"),
        ),
        "ChaincodeAction": (
            ("results", 1, "bytes"),
            ("events", 2, "bytes"),
            ("response", 3, ".protos.Response"),
            ("chaincode_id", 4, ".protos.ChaincodeID"),
        ),
        "Response": (
            ("status", 1, "int32"),
            ("message", 2, "string"),
            ("payload", 3, "bytes"),
        ),
        "ChaincodeID": (
            ("path", 1, "string"),
            ("name", 2, "string"),
            ("version", 3, "string"),
        ),
    }),
    "rwset": ((), {
        "TxReadWriteSet": (
            ("data_model", 1, "int32"),
            ("ns_rwset", 2, "repeated .rwset.NsReadWriteSet"),
        ),
        "NsReadWriteSet": (
            ("namespace", 1, "string"),
            ("rwset", 2, "bytes"),
            ("collection_hashed_rwset", 3, "repeated .rwset.CollectionHashedReadWriteSet"),
        ),
        "CollectionHashedReadWriteSet": (
            ("collection_name", 1, "string"),
            ("hashed_rwset", 2, "bytes"),
            ("pvt_rwset_hash", 3, "bytes"),
        ),
    }),
    "kvrwset": ((), {
        "KVRWSet": (
            ("reads", 1, "repeated .kvrwset.KVRead"),
            ("writes", 3, "repeated .kvrwset.KVWrite"),
        ),
        "KVRead": (
            ("key", 1, "string"),
            ("version", 2, ".kvrwset.Version"),
        ),
        "KVWrite": (
            ("key", 1, "string"),
            ("is_delete", 2, "bool"),
            ("value", 3, "bytes"),
        ),
        "Version": (
            ("block_num", 1, "uint64"),
            ("tx_num", 2, "uint64"),
        ),
    }),
}


def _field_proto(name: str, number: int, type_spec: str) -> descriptor_pb2.FieldDescriptorProto:
    label = _FDP.LABEL_OPTIONAL
    if type_spec.startswith("repeated "):
        label = _FDP.LABEL_REPEATED
        type_spec = type_spec.removeprefix("repeated ")
    field = _FDP(name=name, number=number, label=label)
    if type_spec.startswith("."):
        field.type = _FDP.TYPE_MESSAGE
        field.type_name = type_spec
    else:
        field.type = _SCALARS[type_spec]
    return field


def _file_proto(
    package: str,
    dependencies: tuple[str, ...],
    messages: dict[str, tuple[tuple[str, int, str], ...]],
) -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=f"offchain_data/{package}.proto",
        package=package,
        syntax="proto3",
        dependency=list(dependencies),
    )
    for message_name, fields in messages.items():
        message = file_proto.message_type.add(name=message_name)
        message.field.extend(_field_proto(*spec) for spec in fields)
    return file_proto


def _build_pool() -> descriptor_pool.DescriptorPool:
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(timestamp_pb2.DESCRIPTOR.serialized_pb)
    for package, (dependencies, messages) in _PACKAGES.items():
        pool.AddSerializedFile(
            _file_proto(package, dependencies, messages).SerializeToString(),
        )
    return pool


_POOL = _build_pool()


def message_class(full_name: str) -> type:
    """Concrete message class for a schema type, e.g. "common.Envelope"."""
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(full_name))


# ─── common ──────────────────────────────────────────────────────

Envelope = message_class("common.Envelope")
Payload = message_class("common.Payload")
Header = message_class("common.Header")
ChannelHeader = message_class("common.ChannelHeader")
SignatureHeader = message_class("common.SignatureHeader")
Block = message_class("common.Block")
BlockHeader = message_class("common.BlockHeader")
BlockData = message_class("common.BlockData")
BlockMetadata = message_class("common.BlockMetadata")

# ─── msp ─────────────────────────────────────────────────────────

SerializedIdentity = message_class("msp.SerializedIdentity")

# ─── peer ────────────────────────────────────────────────────────

Transaction = message_class("protos.Transaction")
TransactionAction = message_class("protos.TransactionAction")
ChaincodeActionPayload = message_class("protos.ChaincodeActionPayload")
ChaincodeEndorsedAction = message_class("protos.ChaincodeEndorsedAction")
Endorsement = message_class("protos.Endorsement")
ProposalResponsePayload = message_class("protos.ProposalResponsePayload")
ChaincodeAction = message_class("protos.ChaincodeAction")
Response = message_class("protos.Response")
ChaincodeID = message_class("protos.ChaincodeID")

# ─── ledger rwset ────────────────────────────────────────────────

TxReadWriteSet = message_class("rwset.TxReadWriteSet")
NsReadWriteSet = message_class("rwset.NsReadWriteSet")
KVRWSet = message_class("kvrwset.KVRWSet")
KVRead = message_class("kvrwset.KVRead")
KVWrite = message_class("kvrwset.KVWrite")
Version = message_class("kvrwset.Version")
