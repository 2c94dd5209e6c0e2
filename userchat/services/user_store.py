"""User Store — SQLAlchemy implementation of the UserStore protocol.

Invariants:
    - create() checks email uniqueness, then inserts; the UNIQUE constraint
      turns a racing duplicate into DuplicateEmailError as well
    - update() re-checks uniqueness when the email changes to another owner's
    - Every mutating method commits before returning
    - get_by_name_substring() is case-sensitive and returns the lowest id match
    - list_all() returns a fresh snapshot in id order

Design Decisions:
    - instr() over LIKE for substring lookup: SQLite LIKE folds ASCII case
    - Store is bound to one AsyncSession: the caller owns the session scope
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from userchat.core.domain_types import UserId
from userchat.core.errors import DuplicateEmailError
from userchat.models.user import User

logger = logging.getLogger(__name__)


class SqlUserStore:
    """User record persistence over a single AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, email: str) -> User:
        """Insert a new user. Raises DuplicateEmailError on an existing email."""
        if await self._email_owner(email) is not None:
            raise DuplicateEmailError(email)

        user = User(
            name=name, email=email,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(user)
        await self._commit_or_conflict(email)
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def get_by_id(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_name_substring(self, fragment: str) -> User | None:
        result = await self.db.execute(
            select(User)
            .where(func.instr(User.name, fragment) > 0)
            .order_by(User.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def update(
        self, user_id: UserId,
        name: str | None = None, email: str | None = None,
    ) -> User | None:
        """Apply supplied fields only. Returns None when the id is unknown."""
        user = await self.db.get(User, user_id)
        if user is None:
            return None

        if email is not None and email != user.email:
            owner = await self._email_owner(email)
            if owner is not None and owner.id != user.id:
                raise DuplicateEmailError(email)
            user.email = email
        if name is not None:
            user.name = name

        await self._commit_or_conflict(user.email)
        return user

    async def delete(self, user_id: UserId) -> User | None:
        """Remove the record and return its prior state."""
        user = await self.db.get(User, user_id)
        if user is None:
            return None
        await self.db.delete(user)
        await self.db.commit()
        logger.info("User deleted", extra={"user_id": user_id})
        return user

    async def _email_owner(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email).limit(1)
        )
        return result.scalar_one_or_none()

    async def _commit_or_conflict(self, email: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateEmailError(email) from e
