"""Minute model and the records embedded in it."""

from collections.abc import Iterator
from enum import Enum

from pydantic import Field, field_validator, model_validator

from src.models.base import ApiModel, BaseEntity, new_id
from src.models.catalog import Tag
from src.models.user import User


class MinuteStatus(str, Enum):
    """Publication status of a minute."""

    DRAFT = "draft"
    PUBLISHED = "published"


class MinuteItem(ApiModel):
    """A discussed topic or a decision.

    A bare string is accepted and becomes an item with that text.
    """

    id: str = Field(default_factory=new_id)
    text: str = ""
    mentions: list[str] = Field(default_factory=list, description="Mentioned user ids")
    project_ids: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _from_text(cls, data):
        if isinstance(data, str):
            return {"text": data}
        return data


class Task(MinuteItem):
    """A pending task, embedded in a minute or stored on its own."""

    assigned_to: str | None = None
    due_date: str | None = Field(default=None, description="ISO date as entered")
    completed: bool = False
    minute_id: str | None = None


class OccasionalParticipant(ApiModel):
    """External attendee without an account."""

    id: str = Field(default_factory=new_id)
    name: str = ""
    email: str | None = None


class InformedPerson(ApiModel):
    """Someone kept informed about the minute without attending."""

    id: str = Field(default_factory=new_id)
    name: str = ""
    email: str | None = None
    reason: str | None = None
    is_internal: bool = False


class ExternalMention(ApiModel):
    """A mentioned person that is not a registered user."""

    id: str = Field(default_factory=new_id)
    name: str
    context: str | None = None


class FileAttachment(BaseEntity):
    """Metadata of a file attached to a minute."""

    name: str
    url: str
    type: str = "application/octet-stream"
    size: int = Field(default=0, ge=0)
    uploaded_by: str | None = None
    uploaded_at: str | None = None


class TopicGroup(ApiModel):
    """Topics, decisions and tasks filed under one topic."""

    id: str = Field(default_factory=new_id)
    name: str
    color: str = "#3b82f6"
    description: str | None = None
    topics_discussed: list[MinuteItem] = Field(default_factory=list)
    decisions: list[MinuteItem] = Field(default_factory=list)
    pending_tasks: list[Task] = Field(default_factory=list)

    @field_validator("topics_discussed", "decisions", "pending_tasks", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class Minute(BaseEntity):
    """A meeting record.

    Top-level topics/decisions/tasks predate topic groups and are kept for
    older minutes; both are read together through ``all_*`` properties.
    """

    number: int = Field(default=0, ge=0, description="Sequential minute number")
    title: str = ""
    meeting_date: str = ""
    meeting_time: str = ""
    next_meeting_date: str | None = None
    next_meeting_time: str | None = None
    next_meeting_notes: str | None = None
    participant_ids: list[str] = Field(default_factory=list)
    participants: list[User] = Field(default_factory=list)
    occasional_participants: list[OccasionalParticipant] = Field(default_factory=list)
    informed_persons: list[InformedPerson] = Field(default_factory=list)
    topic_groups: list[TopicGroup] = Field(default_factory=list)
    topics_discussed: list[MinuteItem] = Field(default_factory=list)
    decisions: list[MinuteItem] = Field(default_factory=list)
    pending_tasks: list[Task] = Field(default_factory=list)
    internal_notes: str | None = None
    tags: list[Tag] = Field(default_factory=list)
    files: list[FileAttachment] = Field(default_factory=list)
    status: MinuteStatus = Field(default=MinuteStatus.DRAFT)
    external_mentions: list[ExternalMention] = Field(default_factory=list)
    created_by: str | None = None
    project_ids: list[str] = Field(default_factory=list)

    @field_validator(
        "participant_ids",
        "participants",
        "occasional_participants",
        "informed_persons",
        "topic_groups",
        "topics_discussed",
        "decisions",
        "pending_tasks",
        "tags",
        "files",
        "external_mentions",
        "project_ids",
        mode="before",
    )
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @property
    def is_published(self) -> bool:
        """Check if minute has been published."""
        return self.status == MinuteStatus.PUBLISHED

    @property
    def all_topics(self) -> list[MinuteItem]:
        """Top-level topics followed by topics of each group."""
        grouped = (t for g in self.topic_groups for t in g.topics_discussed)
        return [*self.topics_discussed, *grouped]

    @property
    def all_decisions(self) -> list[MinuteItem]:
        """Top-level decisions followed by decisions of each group."""
        grouped = (d for g in self.topic_groups for d in g.decisions)
        return [*self.decisions, *grouped]

    @property
    def all_pending_tasks(self) -> list[Task]:
        """Top-level tasks followed by tasks of each group."""
        grouped = (t for g in self.topic_groups for t in g.pending_tasks)
        return [*self.pending_tasks, *grouped]

    def iter_items(self) -> Iterator[MinuteItem]:
        """Yield every topic, decision and task of the minute."""
        yield from self.all_topics
        yield from self.all_decisions
        yield from self.all_pending_tasks
