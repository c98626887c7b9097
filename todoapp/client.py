"""Shared data access client.

One ``DataAccessClient`` is built per process and handed to every service.
Each operation opens a session from the shared pool, issues one statement
and translates driver failures into ``todoapp.errors`` types.
"""
import asyncio
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

import structlog
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from todoapp.config import Settings
from todoapp.database import Database
from todoapp.errors import ConstraintViolation, StorageError, StorageTimeout, StorageUnavailable
from todoapp.models.todo import Todo
from todoapp.models.user import User
from todoapp.repositories.todo_repo import TodoRepository
from todoapp.repositories.user_repo import UserRepository

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def translate_error(exc: BaseException) -> StorageError:
    """Map a driver/ORM failure onto the storage error taxonomy."""
    if isinstance(exc, (IntegrityError, DataError)):
        return ConstraintViolation(str(exc.orig))
    if isinstance(exc, (OperationalError, InterfaceError)):
        return StorageUnavailable(str(exc.orig))
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return StorageUnavailable(str(exc.orig))
    if isinstance(exc, DBAPIError):
        # schema or driver faults such as a missing table; retrying will not help
        return StorageError(str(exc.orig))
    return StorageUnavailable(str(exc))


class DataAccessClient:
    def __init__(self, database: Database, operation_timeout: float = 10.0):
        self.database = database
        self.operation_timeout = operation_timeout
        self.users = UserRepository()
        self.todos = TodoRepository()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DataAccessClient":
        return cls(Database.from_settings(settings), operation_timeout=settings.operation_timeout)

    async def _run(self, operation: str, fn: Callable[..., Awaitable[T]], *args, write: bool = False) -> T:
        async def call():
            async with self.database.session() as db:
                return await fn(db, *args)

        try:
            return await asyncio.wait_for(call(), timeout=self.operation_timeout)
        except asyncio.TimeoutError:
            logger.error("Storage operation timed out", operation=operation, timeout=self.operation_timeout)
            # a write may have committed before the deadline, so retrying could duplicate it
            raise StorageTimeout(
                f"{operation} timed out after {self.operation_timeout}s", retryable=not write
            ) from None
        except (SQLAlchemyError, OSError) as exc:
            error = translate_error(exc)
            logger.error("Storage operation failed", operation=operation, kind=error.kind, error=error.message)
            raise error from exc

    async def list_users(self) -> Sequence[User]:
        return await self._run("list_users", self.users.list)

    async def list_todos(self) -> Sequence[Todo]:
        return await self._run("list_todos", self.todos.list)

    async def create_user(self, username: str, password: str) -> User:
        return await self._run("create_user", self.users.create, username, password, write=True)

    async def create_todo(self, task: str, user_id: str, done: Optional[bool] = None) -> Todo:
        return await self._run("create_todo", self.todos.create, task, user_id, done, write=True)

    async def close(self) -> None:
        await self.database.dispose()
