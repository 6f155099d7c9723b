"""Unmarshal: one typed decode step from bytes to a wire_schema message."""

from google.protobuf.message import DecodeError as ProtobufDecodeError, Message

from offchain_data.core.errors import DecodeError, ErrorContext


def unmarshal(
    message_type: type[Message],
    data: bytes,
    stage: str,
    context: ErrorContext | None = None,
) -> Message:
    """Parse `data` as `message_type`; malformed bytes raise DecodeError naming `stage`."""
    message = message_type()
    try:
        message.ParseFromString(data)
    except ProtobufDecodeError as e:
        raise DecodeError(stage, str(e), context) from e
    return message
