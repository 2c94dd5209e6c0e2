"""Services Layer — record store, operation handlers, dispatch and chat runner.

Invariants:
    - Operation dispatch uses an explicit dict mapping (no auto-discovery)
    - Dispatch never raises to its caller

Design Decisions:
    - Store, handlers and dispatch in separate files: each is readable alone
"""
