"""Failure Simulation: injects one transient store failure after every N successful writes.

Invariants:
    - trigger_count == 0 disables simulation (check() never raises)
    - With trigger_count N > 0: calls 1..N pass, call N+1 raises and resets the counter,
      so the pattern repeats (N=3: 1-3 pass, 4 fails, 5-7 pass, 8 fails)
    - The counter lives on the instance, never in module state

Design Decisions:
    - Explicit object injected into the store: tests get a fresh counter per case
"""

from offchain_data.core.errors import ConfigurationError, SimulatedWriteFailureError


class FailureSimulator:
    """Counts store calls and raises SimulatedWriteFailureError on schedule."""

    def __init__(self, trigger_count: int = 0):
        if trigger_count < 0:
            raise ConfigurationError(
                f"invalid SIMULATED_FAILURE_COUNT value: {trigger_count}",
            )
        self.trigger_count = trigger_count
        self.count = 0

    @property
    def enabled(self) -> bool:
        return self.trigger_count > 0

    def check(self) -> None:
        """Raise SimulatedWriteFailureError when due; otherwise count this call."""
        if self.enabled and self.count >= self.trigger_count:
            self.count = 0
            raise SimulatedWriteFailureError()
        self.count += 1

    def reset(self) -> None:
        self.count = 0
