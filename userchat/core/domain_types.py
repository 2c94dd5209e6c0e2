"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps int — store-assigned, never reused
    - Every recognized operation name resolves to exactly one Operation
    - Alias lookup is case-insensitive; unknown names resolve to None

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (log extras, result envelopes)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Value Types ─────────────────────────────────────────────────

ParamValue = str | int


# ─── Enums ───────────────────────────────────────────────────────

class Operation(str, Enum):
    """Canonical CRUD operations after alias resolution."""
    ADD = "add"
    GET = "get"
    LIST = "list"
    UPDATE = "update"
    DELETE = "delete"


class ChatRole(str, Enum):
    """Message roles accepted by the Messages API."""
    USER = "user"
    ASSISTANT = "assistant"


# ─── Alias Resolution ────────────────────────────────────────────

OPERATION_ALIASES: dict[str, Operation] = {
    "add_user": Operation.ADD,
    "create_user": Operation.ADD,
    "get_user": Operation.GET,
    "find_user": Operation.GET,
    "list_users": Operation.LIST,
    "get_all_users": Operation.LIST,
    "update_user": Operation.UPDATE,
    "delete_user": Operation.DELETE,
}


def resolve_operation(name: str) -> Operation | None:
    """Map an operation name (any case) to its canonical Operation."""
    return OPERATION_ALIASES.get(name.strip().lower())
