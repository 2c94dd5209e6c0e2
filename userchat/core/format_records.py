"""Record Formatting — deterministic text rendering of user records.

Invariants:
    - Dates render as yyyy-MM-dd in UTC
    - Get and List share the same field sequence (ID, Name, Email, Created)
    - Output is a pure function of the records passed in
"""

from collections.abc import Sequence
from datetime import datetime, timezone

from userchat.core.repository_protocols import UserLike


def format_created(value: datetime) -> str:
    """Format a creation timestamp as yyyy-MM-dd (UTC)."""
    # SQLite drops tzinfo on read; stored values are always UTC.
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%d")


def format_fields(user: UserLike) -> str:
    return (
        f"ID={user.id}, Name={user.name}, Email={user.email}, "
        f"Created={format_created(user.created_at)}"
    )


def format_user(user: UserLike) -> str:
    """Single-record line used by Get."""
    return f"User: {format_fields(user)}"


def format_user_list(users: Sequence[UserLike]) -> str:
    """Multi-record block used by List."""
    if not users:
        return "No users in database"
    lines = [f"Found {len(users)} user(s):"]
    lines.extend(f"- {format_fields(u)}" for u in users)
    return "\n".join(lines).rstrip()
