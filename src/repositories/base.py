"""Generic JSON-document repository over libSQL.

Each entity is stored as one row: its id, its JSON document, and any
indexed columns a subclass declares for lookups.
"""

from typing import Any, ClassVar, Generic, TypeVar

from src.db.turso import TursoClient
from src.models.base import ApiModel, BaseEntity

EntityT = TypeVar("EntityT", bound=ApiModel)


class EntityRepository(Generic[EntityT]):
    """Repository storing pydantic entities as JSON documents.

    Subclasses set ``table`` and ``model`` and may declare
    ``extra_columns`` (name -> SQL column definition) whose values are
    produced by ``_column_values``.
    """

    table: ClassVar[str]
    model: ClassVar[type[ApiModel]]
    extra_columns: ClassVar[dict[str, str]] = {}
    indexes: ClassVar[list[str]] = []

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create the entity table and its indexes if they don't exist."""
        extra = "".join(
            f",\n                {name} {definition}"
            for name, definition in self.extra_columns.items()
        )
        statements = [
            f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                id TEXT PRIMARY KEY,
                data TEXT NOT NULL{extra},
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
            """,
            *self.indexes,
        ]
        await self._db.execute_batch(statements)

    def _serialize(self, entity: EntityT) -> str:
        return entity.model_dump_json(by_alias=True)

    def _deserialize(self, data: str) -> EntityT:
        return self.model.model_validate_json(data)

    def _column_values(self, entity: EntityT) -> dict[str, Any]:
        """Values for ``extra_columns`` derived from the entity."""
        return {}

    async def create(self, entity: EntityT) -> EntityT:
        """Insert a new entity.

        Args:
            entity: Entity to persist

        Returns:
            The persisted entity
        """
        columns = {"id": entity.id, "data": self._serialize(entity)}
        columns.update(self._column_values(entity))
        placeholders = ", ".join("?" for _ in columns)
        await self._db.execute(
            f"INSERT INTO {self.table} ({', '.join(columns)}) VALUES ({placeholders})",
            list(columns.values()),
        )
        return entity

    async def get(self, entity_id: str) -> EntityT | None:
        """Get an entity by id.

        Returns:
            The entity, or None if not found
        """
        row = await self._db.fetch_one(
            f"SELECT data FROM {self.table} WHERE id = ?",
            [entity_id],
        )
        return self._deserialize(row["data"]) if row else None

    async def list_all(self) -> list[EntityT]:
        """Get all entities in insertion order."""
        rows = await self._db.fetch_all(
            f"SELECT data FROM {self.table} ORDER BY rowid"
        )
        return [self._deserialize(row["data"]) for row in rows]

    async def get_many(self, entity_ids: list[str]) -> list[EntityT]:
        """Get all entities whose id is in ``entity_ids``."""
        if not entity_ids:
            return []
        placeholders = ", ".join("?" for _ in entity_ids)
        rows = await self._db.fetch_all(
            f"SELECT data FROM {self.table} WHERE id IN ({placeholders}) ORDER BY rowid",
            list(entity_ids),
        )
        return [self._deserialize(row["data"]) for row in rows]

    async def update(self, entity: EntityT) -> EntityT | None:
        """Replace a stored entity with a new version.

        Returns:
            The updated entity, or None if no entity has that id
        """
        if isinstance(entity, BaseEntity):
            entity.touch()
        columns = {"data": self._serialize(entity)}
        columns.update(self._column_values(entity))
        assignments = ", ".join(f"{name} = ?" for name in columns)
        result = await self._db.execute(
            f"UPDATE {self.table} SET {assignments} WHERE id = ?",
            [*columns.values(), entity.id],
        )
        if result.rows_affected == 0:
            return None
        return entity

    async def delete(self, entity_id: str) -> bool:
        """Delete an entity.

        Returns:
            True if an entity was deleted, False if not found
        """
        result = await self._db.execute(
            f"DELETE FROM {self.table} WHERE id = ?",
            [entity_id],
        )
        return result.rows_affected > 0
