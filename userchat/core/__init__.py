"""Core Layer — domain types, validation, formatting, command extraction.

Invariants:
    - No module in core/ imports from services/, infrastructure/, models/ or db/
    - Functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: handlers do IO,
      core decides what the text and errors look like
"""
