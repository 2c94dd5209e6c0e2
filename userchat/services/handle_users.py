"""User Handlers — add, get, list, update, delete (5 methods).

Invariants:
    - Handlers validate before touching the store where the check is pure
    - Failures are raised as typed UserChatError subclasses; dispatch renders them
    - Success results are {"status": "ok", "message": ...} envelopes
    - Update checks existence before validating fields: an unknown id is
      reported as not found whatever fields were supplied

Design Decisions:
    - Store injected per call (one session scope per dispatch), handlers hold no state
    - Blank text counts as missing for required fields and for Get-by-name
"""

from userchat.core.domain_types import UserId
from userchat.core.errors import OperationValidationError, ResourceNotFoundError
from userchat.core.format_records import format_user, format_user_list
from userchat.core.parameter_bag import ParameterBag
from userchat.core.repository_protocols import UserStore


def _ok(message: str, **fields: object) -> dict:
    return {"status": "ok", "message": message, **fields}


def _text_or_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def _not_found_by_id(user_id: int) -> ResourceNotFoundError:
    return ResourceNotFoundError("User", f"ID {user_id}")


class UserHandlers:
    """CRUD handlers over a UserStore."""

    def __init__(self, store: UserStore):
        self.store = store

    async def add_user(self, params: ParameterBag) -> dict:
        name = _text_or_none(params.get_text("name"))
        email = _text_or_none(params.get_text("email"))
        if name is None or email is None:
            raise OperationValidationError("Name and email are required")

        user = await self.store.create(name, email)
        return _ok(
            f"User '{user.name}' added successfully with ID {user.id}",
            user_id=user.id,
        )

    async def get_user(self, params: ParameterBag) -> dict:
        user_id = params.get_int("id")
        if user_id is not None:
            user = await self.store.get_by_id(UserId(user_id))
            if user is None:
                raise _not_found_by_id(user_id)
            return _ok(format_user(user), user_id=user.id)

        fragment = _text_or_none(params.get_text("name"))
        if fragment is not None:
            user = await self.store.get_by_name_substring(fragment)
            if user is None:
                raise ResourceNotFoundError("User", f"name '{fragment}'")
            return _ok(format_user(user), user_id=user.id)

        raise OperationValidationError(
            "Please provide either 'id' or 'name' to find a user",
        )

    async def list_users(self, params: ParameterBag) -> dict:
        users = await self.store.list_all()
        return _ok(format_user_list(users), count=len(users))

    async def update_user(self, params: ParameterBag) -> dict:
        user_id = params.get_int("id")
        if user_id is None:
            raise OperationValidationError(
                "User ID is required for update", field="id",
            )
        if await self.store.get_by_id(UserId(user_id)) is None:
            raise _not_found_by_id(user_id)

        name = self._optional_field(params, "name")
        email = self._optional_field(params, "email")
        if name is None and email is None:
            raise OperationValidationError(
                "No fields to update. Provide 'name' or 'email'",
            )

        user = await self.store.update(UserId(user_id), name=name, email=email)
        if user is None:
            raise _not_found_by_id(user_id)
        return _ok(f"User {user.id} updated successfully", user_id=user.id)

    async def delete_user(self, params: ParameterBag) -> dict:
        user_id = params.get_int("id")
        if user_id is None:
            raise OperationValidationError(
                "User ID is required for deletion", field="id",
            )

        user = await self.store.delete(UserId(user_id))
        if user is None:
            raise _not_found_by_id(user_id)
        return _ok(
            f"User '{user.name}' (ID={user.id}) deleted successfully",
            user_id=user.id,
        )

    @staticmethod
    def _optional_field(params: ParameterBag, key: str) -> str | None:
        """Supplied-but-blank is an error; absent is None."""
        value = params.get_text(key)
        if value is None:
            return None
        if not value.strip():
            raise OperationValidationError(f"'{key}' must not be blank", field=key)
        return value
