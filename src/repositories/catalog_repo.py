"""Repositories for projects, attachments and global labeling entities."""

from src.models.catalog import GlobalTopicGroup, MinuteTemplate, Tag
from src.models.minute import FileAttachment
from src.models.user import Project
from src.repositories.base import EntityRepository


class ProjectRepository(EntityRepository[Project]):
    table = "projects"
    model = Project


class TagRepository(EntityRepository[Tag]):
    table = "tags"
    model = Tag


class GlobalTopicGroupRepository(EntityRepository[GlobalTopicGroup]):
    table = "global_topic_groups"
    model = GlobalTopicGroup


class TemplateRepository(EntityRepository[MinuteTemplate]):
    table = "minute_templates"
    model = MinuteTemplate


class AttachmentRepository(EntityRepository[FileAttachment]):
    table = "file_attachments"
    model = FileAttachment
