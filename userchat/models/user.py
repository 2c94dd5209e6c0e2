"""User ORM — the single persisted entity.

Invariants:
    - Table "Users" with columns Id, Name, Email, CreatedAt
    - Id is AUTOINCREMENT: monotonic, never reused after delete
    - Email UNIQUE (binary collation: case-sensitive exact match)
    - created_at set once at insert, UTC

Design Decisions:
    - Python attribute names are snake_case, column names keep the
      PascalCase layout existing llama.db files already use
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from userchat.db.base import Base


class User(Base):
    """User record — id, name, email, creation time."""
    __tablename__ = "Users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        "Id", Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column("Name", Text, nullable=False)
    email: Mapped[str] = mapped_column(
        "Email", Text, nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        "CreatedAt",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.name!r}, email={self.email!r})"
