"""Core Layer: pure decoding and domain logic, no file IO.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - Decoders are pure and deterministic: identical bytes yield identical results

Design Decisions:
    - Functional core separated from imperative shell (store, checkpoint, CLI)
"""
