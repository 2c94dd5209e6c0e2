"""Database Infrastructure — SQLAlchemy Base and session factory.

Invariants:
    - Single async engine per process (owned by DatabaseSessionManager)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite driver: the record store is a local file next to the chat
"""
