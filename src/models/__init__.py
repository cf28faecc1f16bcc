"""Canonical data models for the minutes manager.

This module exports all domain models used throughout the application:
- BaseEntity / ApiModel: Base classes with id, timestamps, camelCase aliases
- User, Project: Accounts and the projects they are assigned to
- Minute: Meeting record with topic groups, decisions and tasks
- Tag, GlobalTopicGroup, MinuteTemplate: Global labeling entities
"""

from src.models.base import ApiModel, BaseEntity, new_id
from src.models.catalog import (
    GlobalTopicGroup,
    MinuteTemplate,
    Tag,
    TemplateSections,
    TemplateTopicGroup,
)
from src.models.minute import (
    ExternalMention,
    FileAttachment,
    InformedPerson,
    Minute,
    MinuteItem,
    MinuteStatus,
    OccasionalParticipant,
    Task,
    TopicGroup,
)
from src.models.user import Project, User, UserEmail, UserRole

__all__ = [
    # Base
    "ApiModel",
    "BaseEntity",
    "new_id",
    # Accounts
    "User",
    "UserEmail",
    "UserRole",
    "Project",
    # Minutes
    "Minute",
    "MinuteItem",
    "MinuteStatus",
    "Task",
    "TopicGroup",
    "OccasionalParticipant",
    "InformedPerson",
    "ExternalMention",
    "FileAttachment",
    # Catalog
    "Tag",
    "GlobalTopicGroup",
    "MinuteTemplate",
    "TemplateSections",
    "TemplateTopicGroup",
]
