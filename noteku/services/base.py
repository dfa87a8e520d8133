"""
Base Service.

Base class for services that sit between display code and the
repositories. Services own the error propagation policy: application
errors raised below them are logged and returned as a failed Result,
never re-raised to the caller.

Usage:
    from noteku.services.base import BaseService

    class NoteService(BaseService):
        async def list_notes(self) -> Result:
            return await self._run("list_notes", self.repo.list(), fallback=[])
"""

from collections.abc import Awaitable
from typing import Any

from noteku.core.exceptions import ApplicationError
from noteku.core.logging import get_logger
from noteku.schemas.base import Result


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging bound to the subclass module
    - Conversion of ApplicationError into failed Results
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    async def _run(
        self,
        operation: str,
        coro: Awaitable[Any],
        fallback: Any = None,
    ) -> Result:
        """
        Await a repository call and wrap its outcome.

        Args:
            operation: Name of the operation for logging
            coro: Awaitable to execute
            fallback: Data carried by the Result if the call fails

        Returns:
            Result.ok with the value, or Result.failed with ``fallback``
        """
        try:
            value = await coro
        except ApplicationError as e:
            self._logger.error(
                "Service operation failed",
                service=self.__class__.__name__,
                operation=operation,
                code=e.code,
                error=e.message,
            )
            return Result.failed(e, data=fallback)
        return Result.ok(value)

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a service operation with context."""
        self._logger.info(operation, service=self.__class__.__name__, **context)
