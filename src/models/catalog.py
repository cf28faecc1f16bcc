"""Globally scoped labeling entities: tags, topic groups, templates."""

from pydantic import Field

from src.models.base import ApiModel, BaseEntity, new_id


class Tag(BaseEntity):
    """A colored label attachable to minutes."""

    name: str = Field(min_length=1, max_length=100)
    color: str = Field(default="#6b7280")


class GlobalTopicGroup(BaseEntity):
    """A reusable topic group offered when writing minutes."""

    name: str = Field(min_length=1, max_length=200)
    color: str = Field(default="#3b82f6")
    description: str | None = None
    is_active: bool = True
    created_by: str | None = None


class TemplateTopicGroup(ApiModel):
    """Predefined topic group carried by a template."""

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1, max_length=200)
    color: str = Field(default="#3b82f6")
    description: str = ""


class TemplateSections(ApiModel):
    """Starter lines for each section of a minute."""

    topics_discussed: list[str] = Field(default_factory=list)
    decisions: list[str] = Field(default_factory=list)
    pending_tasks: list[str] = Field(default_factory=list)


class MinuteTemplate(BaseEntity):
    """Template used to prefill a new minute."""

    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    icon: str = "FileText"
    color: str = "#3b82f6"
    sections: TemplateSections = Field(default_factory=TemplateSections)
    topic_groups: list[TemplateTopicGroup] = Field(default_factory=list)
    is_custom: bool = True
    created_by: str | None = None
    project_ids: list[str] = Field(default_factory=list)
