"""Off-Chain Data Package: ledger transaction decoding and off-chain write replication.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
