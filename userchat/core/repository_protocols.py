"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Record persistence accessed through the UserStore Protocol
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; core formatting and
      validation that USE these types stay synchronous
"""

from datetime import datetime
from typing import Protocol

from userchat.core.domain_types import UserId


class UserLike(Protocol):
    """Structural contract for user records passed to formatters and handlers."""
    id: int
    name: str
    email: str
    created_at: datetime


class UserStore(Protocol):
    """Contract for user record persistence — implemented by shell."""
    async def create(self, name: str, email: str) -> UserLike: ...
    async def get_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_name_substring(self, fragment: str) -> UserLike | None: ...
    async def list_all(self) -> list[UserLike]: ...
    async def update(
        self, user_id: UserId,
        name: str | None = None, email: str | None = None,
    ) -> UserLike | None: ...
    async def delete(self, user_id: UserId) -> UserLike | None: ...
