"""CRUD endpoints for projects, tags, tasks, attachments, templates and
global topic groups."""

from src.api.crud import build_crud_router
from src.auth.access import visible_projects
from src.models.catalog import GlobalTopicGroup, MinuteTemplate, Tag
from src.models.minute import FileAttachment, Task
from src.models.user import Project

projects_router = build_crud_router(
    prefix="/api/projects",
    tag="projects",
    repo_name="projects",
    model=Project,
    label="Project",
    list_filter=visible_projects,
)

tags_router = build_crud_router(
    prefix="/api/tags",
    tag="tags",
    repo_name="tags",
    model=Tag,
    label="Tag",
)

tasks_router = build_crud_router(
    prefix="/api/tasks",
    tag="tasks",
    repo_name="tasks",
    model=Task,
    label="Task",
)

attachments_router = build_crud_router(
    prefix="/api/attachments",
    tag="attachments",
    repo_name="attachments",
    model=FileAttachment,
    label="Attachment",
)

# Topic groups are embedded in the template document, so an update that
# carries topicGroups replaces the whole list
templates_router = build_crud_router(
    prefix="/api/templates",
    tag="templates",
    repo_name="templates",
    model=MinuteTemplate,
    label="Template",
)

global_topic_groups_router = build_crud_router(
    prefix="/api/globalTopicGroups",
    tag="global-topic-groups",
    repo_name="global_topic_groups",
    model=GlobalTopicGroup,
    label="Global topic group",
)
