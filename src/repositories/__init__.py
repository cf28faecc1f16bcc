"""Repository layer for data persistence.

Provides repository classes for persisting domain data to the database.
Repositories encapsulate data access logic and provide a clean interface
for the API layer.
"""

from src.db.turso import TursoClient
from src.repositories.base import EntityRepository
from src.repositories.catalog_repo import (
    AttachmentRepository,
    GlobalTopicGroupRepository,
    ProjectRepository,
    TagRepository,
    TemplateRepository,
)
from src.repositories.minute_repo import MinuteRepository, TaskRepository
from src.repositories.user_repo import UserRepository


class Repositories:
    """All repositories of the application, sharing one database client."""

    def __init__(self, db_client: TursoClient):
        self.users = UserRepository(db_client)
        self.projects = ProjectRepository(db_client)
        self.minutes = MinuteRepository(db_client)
        self.tasks = TaskRepository(db_client)
        self.attachments = AttachmentRepository(db_client)
        self.tags = TagRepository(db_client)
        self.templates = TemplateRepository(db_client)
        self.global_topic_groups = GlobalTopicGroupRepository(db_client)

    def all(self) -> list[EntityRepository]:
        return [
            self.users,
            self.projects,
            self.minutes,
            self.tasks,
            self.attachments,
            self.tags,
            self.templates,
            self.global_topic_groups,
        ]

    async def initialize(self) -> None:
        """Create every table if it doesn't exist."""
        for repo in self.all():
            await repo.initialize()


__all__ = [
    "AttachmentRepository",
    "EntityRepository",
    "GlobalTopicGroupRepository",
    "MinuteRepository",
    "ProjectRepository",
    "Repositories",
    "TagRepository",
    "TaskRepository",
    "TemplateRepository",
    "UserRepository",
]
