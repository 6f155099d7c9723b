"""Infrastructure Layer: file-backed store, checkpoint persistence, logging setup.

Invariants:
    - Every file handle is acquired and released inside a single call
    - OS-level failures mapped to typed errors (core/errors.py)
"""
