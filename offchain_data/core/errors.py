"""Error Hierarchy: typed, categorized exceptions for every decode and replication failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Only WARNING/INFO severities are recoverable; everything else halts processing
    - Decode errors name the stage that failed (envelope, payload, chaincode_action, ...)

Design Decisions:
    - Single hierarchy with OffChainDataError base: the CLI catches one type
    - MissingFieldError kept apart from DecodeError: bytes parsed but a required
      nested structure was empty, which is a different fault than corrupt bytes
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    DECODE = "decode"
    STRUCTURE = "structure"
    CONFIGURATION = "configuration"
    STORE = "store"
    CHECKPOINT = "checkpoint"


@dataclass
class ErrorContext:
    """Where in the ledger the failure happened."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    block_number: int | None = None
    transaction_id: str | None = None
    namespace: str | None = None
    stage: str | None = None
    debug_info: dict[str, Any] | None = None


class OffChainDataError(Exception):
    """Base exception for all off-chain data errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_dict(self) -> dict:
        """Structured form for JSON logs and test assertions."""
        return {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "recoverable": self.recoverable,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "block_number": self.context.block_number,
                "transaction_id": self.context.transaction_id,
                "namespace": self.context.namespace,
                "stage": self.context.stage,
            },
        }


# ─── Decode Errors (fatal) ───────────────────────────────────────

class DecodeError(OffChainDataError):
    """Bytes at a fatal decode stage did not parse against the wire schema."""
    def __init__(self, stage: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.stage = stage
        super().__init__(
            f"Failed to decode {stage}: {reason}",
            "DECODE_ERROR", ErrorCategory.DECODE,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.stage = stage


class MissingFieldError(OffChainDataError):
    """A nested structure parsed but a required field was empty."""
    def __init__(self, message: str, field_name: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MISSING_FIELD", ErrorCategory.STRUCTURE,
            ErrorSeverity.CRITICAL, context,
        )
        self.field_name = field_name


class ConfigurationError(OffChainDataError):
    """Environment configuration rejected at startup."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid configuration: {message}",
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context,
        )


# ─── Store Errors ────────────────────────────────────────────────

class SimulatedWriteFailureError(OffChainDataError):
    """Injected transient store failure (recoverable, retry expected)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "simulated write failure",
            "SIMULATED_WRITE_FAILURE", ErrorCategory.STORE,
            ErrorSeverity.WARNING, context,
        )


class StoreWriteError(OffChainDataError):
    """Append to the off-chain store failed at the OS level."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store write to '{path}' failed: {message}",
            "STORE_WRITE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context,
        )
        self.path = path


class ReplicationRetriesExhaustedError(OffChainDataError):
    """Store kept reporting failures for the same ledger update."""
    def __init__(self, attempts: int, context: ErrorContext | None = None):
        super().__init__(
            f"Ledger update not stored after {attempts} attempt(s)",
            "REPLICATION_RETRIES_EXHAUSTED", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context,
        )
        self.attempts = attempts


class CheckpointError(OffChainDataError):
    """Checkpoint file unreadable, corrupt, or not writable."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Checkpoint '{path}': {message}",
            "CHECKPOINT_ERROR", ErrorCategory.CHECKPOINT,
            ErrorSeverity.CRITICAL, context,
        )
        self.path = path
