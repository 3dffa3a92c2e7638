"""File-backed document store holding every user and game."""

import asyncio
import inspect
import json
import os
import tempfile
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import structlog
import pydantic
from pydantic import BaseModel, Field

from tictactoe.core.modules.game.models import Game
from tictactoe.core.modules.user.models import User
from tictactoe.errors import StoreSchemaError

logger = structlog.get_logger(__name__)

DB_FILE_NAME = "db.json"

T = TypeVar("T")


class Database(BaseModel):
    """The whole store. Always loaded and written as one unit."""

    users: list[User] = Field(default_factory=list)
    games: list[Game] = Field(default_factory=list)


class PersistentStore:
    """Serializes every load/mutate/save cycle on the backing file through one lock.

    Reads that do not need a consistent snapshot may call load() directly.
    Mutations go through with_store().
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = asyncio.Lock()
        self._pending: set[asyncio.Task[Any]] = set()

    async def load(self) -> Database:
        """Read the backing file. A missing file or one that is not JSON yields an empty database.

        Raises:
            StoreSchemaError: If the file is JSON but does not match the schema; the file is left untouched
        """
        try:
            raw = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
            data = json.loads(raw)
        except FileNotFoundError:
            return Database()
        except (OSError, ValueError) as e:
            logger.warning("database_load_failed", path=str(self.path), error=str(e))
            return Database()

        try:
            return Database.model_validate(data)
        except pydantic.ValidationError as e:
            logger.error("database_schema_invalid", path=str(self.path), error_count=e.error_count())
            raise StoreSchemaError(f"{self.path} does not match the database schema") from e

    async def save(self, db: Database, locking_required: bool = True) -> None:
        """Overwrite the backing file with the full database.

        Pass locking_required=False only when already inside the exclusive section.
        """
        if locking_required:
            async with self._lock:
                await asyncio.to_thread(self._write, db)
        else:
            await asyncio.to_thread(self._write, db)

    async def with_store(self, mutator: Callable[[Database], T | Awaitable[T]]) -> T:
        """Run mutator on a freshly loaded database and persist the result.

        The mutator may be sync or async. If it raises, nothing is saved.
        Cancelling the caller does not interrupt a cycle that has started.
        """
        task = asyncio.create_task(self._run_exclusive(mutator))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return await asyncio.shield(task)

    async def upgrade(self) -> None:
        """Rewrite the file in the current schema; fills defaults for fields older records lack."""

        def touch(db: Database) -> int:
            return len(db.users)

        user_count = await self.with_store(touch)
        logger.debug("database_upgraded", path=str(self.path), user_count=user_count)

    async def _run_exclusive(self, mutator: Callable[[Database], T | Awaitable[T]]) -> T:
        async with self._lock:
            db = await self.load()
            result = mutator(db)
            if inspect.isawaitable(result):
                result = await result
            await self.save(db, locking_required=False)
            return result

    def _write(self, db: Database) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = db.model_dump_json(by_alias=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
