"""Operation Dispatch — explicit routing from operation name to user handler.

Invariants:
    - Every canonical operation -> handler mapping is visible, no getattr magic
    - Operation names are case-insensitive; aliases resolve via core/domain_types
    - Unknown operations return UNKNOWN_OPERATION error (never raises)
    - Every call runs in its own session scope, released on every exit path
    - handle() never raises: every failure becomes a plain-text line
    - Every call logged with operation, status and error code

Design Decisions:
    - execute() returns the result envelope, handle() stringifies it:
      tests and the native-tool path can still tell error kinds apart
    - Handlers instantiated per-dispatch with the scoped store
    - Catch-all on Exception at this boundary only: the chat loop must
      survive storage failures
"""

import logging
from collections.abc import Awaitable, Callable, Mapping

from userchat.core.domain_types import Operation, resolve_operation
from userchat.core.errors import (
    ErrorContext, UnknownOperationError, UserChatError,
)
from userchat.core.parameter_bag import ParameterBag
from userchat.infrastructure.database import DatabaseSessionManager
from userchat.services.handle_users import UserHandlers
from userchat.services.user_store import SqlUserStore

logger = logging.getLogger(__name__)

Handler = Callable[[ParameterBag], Awaitable[dict]]


def _routes(handlers: UserHandlers) -> dict[Operation, Handler]:
    # Every mapping explicit: adding an operation requires editing this dict
    return {
        Operation.ADD: handlers.add_user,
        Operation.GET: handlers.get_user,
        Operation.LIST: handlers.list_users,
        Operation.UPDATE: handlers.update_user,
        Operation.DELETE: handlers.delete_user,
    }


class OperationDispatch:
    """Routes operation name -> handler inside a fresh store scope."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db_manager = db_manager

    async def handle(
        self, operation_name: str, parameters: Mapping[str, object] | None = None,
    ) -> str:
        """Run an operation and return the text shown to the user."""
        result = await self.execute(operation_name, parameters)
        return result["message"]

    async def execute(
        self, operation_name: str, parameters: Mapping[str, object] | None = None,
    ) -> dict:
        """Route operation_name to handler. Returns result dict. Logs every call."""
        operation = resolve_operation(operation_name or "")
        ctx = ErrorContext(operation=operation.value if operation else operation_name)
        try:
            if operation is None:
                raise UnknownOperationError(operation_name, ctx)
            params = ParameterBag.from_mapping(parameters)
            async with self._db_manager.session() as db:
                handlers = UserHandlers(SqlUserStore(db))
                result = await _routes(handlers)[operation](params)
            result["operation"] = operation.value
        except UserChatError as e:
            e.context.operation = ctx.operation
            result = e.to_result()
        except Exception as e:
            logger.error(
                f"Unexpected failure in '{operation_name}': {e}",
                extra={"operation": ctx.operation}, exc_info=True,
            )
            result = {
                "status": "error",
                "operation": ctx.operation,
                "error_code": "INTERNAL_ERROR",
                "category": "internal",
                "message": f"Error: {e}",
            }
        self._log_operation(operation_name, result)
        return result

    def _log_operation(self, operation_name: str, result: dict) -> None:
        logger.info(
            f"Operation '{operation_name}' -> {result['status']}",
            extra={
                "operation": result.get("operation"),
                "error_code": result.get("error_code"),
            },
        )
