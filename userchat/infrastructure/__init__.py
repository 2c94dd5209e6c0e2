"""Infrastructure Layer — database, LLM client and logging.

Invariants:
    - Infrastructure never imports from services/
    - All external calls wrapped with retry/timeout/error mapping

Design Decisions:
    - Resilient wrappers over raw clients: callers see only UserChatError subclasses
"""
