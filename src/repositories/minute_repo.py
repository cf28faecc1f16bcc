"""Repositories for minutes and their stored tasks."""

from typing import Any

from src.models.minute import Minute, Task
from src.repositories.base import EntityRepository


class MinuteRepository(EntityRepository[Minute]):
    """Repository for minutes.

    The sequential minute number is kept in its own column so the next
    number can be computed without loading every minute. The derived
    ``participants`` list is never stored.
    """

    table = "minutes"
    model = Minute
    extra_columns = {"number": "INTEGER NOT NULL DEFAULT 0"}
    indexes = [
        "CREATE INDEX IF NOT EXISTS idx_minutes_number ON minutes(number)",
    ]

    def _serialize(self, entity: Minute) -> str:
        return entity.model_dump_json(by_alias=True, exclude={"participants"})

    def _column_values(self, entity: Minute) -> dict[str, Any]:
        return {"number": entity.number}

    async def next_number(self) -> int:
        """Number for the next minute (highest existing number + 1)."""
        row = await self._db.fetch_one(
            "SELECT COALESCE(MAX(number), 0) AS last_number FROM minutes"
        )
        return int(row["last_number"] if row else 0) + 1

    async def create(self, entity: Minute) -> Minute:
        """Insert a minute, assigning the next number when it has none."""
        if not entity.number:
            entity.number = await self.next_number()
        return await super().create(entity)


class TaskRepository(EntityRepository[Task]):
    """Repository for tasks stored outside of the minute document."""

    table = "tasks"
    model = Task
    extra_columns = {"minute_id": "TEXT"}
    indexes = [
        "CREATE INDEX IF NOT EXISTS idx_tasks_minute ON tasks(minute_id)",
    ]

    def _column_values(self, entity: Task) -> dict[str, Any]:
        return {"minute_id": entity.minute_id}

    async def list_for_minute(self, minute_id: str) -> list[Task]:
        """Get all tasks attached to a minute."""
        rows = await self._db.fetch_all(
            "SELECT data FROM tasks WHERE minute_id = ? ORDER BY rowid",
            [minute_id],
        )
        return [self._deserialize(row["data"]) for row in rows]

    async def delete_for_minute(self, minute_id: str) -> int:
        """Delete all tasks attached to a minute.

        Returns:
            Number of deleted tasks
        """
        result = await self._db.execute(
            "DELETE FROM tasks WHERE minute_id = ?",
            [minute_id],
        )
        return result.rows_affected

    async def replace_for_minute(self, minute_id: str, tasks: list[Task]) -> list[Task]:
        """Replace the tasks of a minute with ``tasks``."""
        await self.delete_for_minute(minute_id)
        stored = []
        for task in tasks:
            task.minute_id = minute_id
            stored.append(await self.create(task))
        return stored
