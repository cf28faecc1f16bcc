"""Minutes API endpoints.

Saving a published minute schedules the email notification as a
background task; the response never waits on mail delivery.
"""

from typing import Any

import structlog
from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Query
from pydantic import ValidationError

from src.api.crud import apply_update
from src.api.deps import get_current_user, get_notifier, get_repositories
from src.auth.access import can_edit_minute, can_view_minute, visible_minutes
from src.mail.dispatcher import MinuteNotifier
from src.mentions.parser import fill_minute_mentions
from src.models.minute import Minute, MinuteStatus, Task
from src.models.user import User
from src.repositories import Repositories

logger = structlog.get_logger()

router = APIRouter(prefix="/api/minutes", tags=["minutes"])


def _split_tasks(payload: dict[str, Any]) -> tuple[dict[str, Any], list[Task] | None]:
    """Separate the stored-tasks list from the minute fields of a body."""
    data = dict(payload)
    raw_tasks = data.pop("tasks", None)
    if raw_tasks is None:
        return data, None
    if not isinstance(raw_tasks, list):
        raise HTTPException(status_code=422, detail="tasks must be a list")
    try:
        return data, [Task.model_validate(t) for t in raw_tasks]
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        )


async def _with_participants(minute: Minute, repos: Repositories) -> Minute:
    minute.participants = await repos.users.get_many(minute.participant_ids)
    return minute


async def _fill_mentions(minute: Minute, repos: Repositories) -> Minute:
    users = await repos.users.list_all()
    projects = await repos.projects.list_all()
    return fill_minute_mentions(minute, users, projects)


async def _get_minute_or_404(minute_id: str, repos: Repositories) -> Minute:
    minute = await repos.minutes.get(minute_id)
    if minute is None:
        raise HTTPException(status_code=404, detail="Minute not found")
    return minute


def _schedule_notification(
    minute: Minute,
    background_tasks: BackgroundTasks,
    notifier: MinuteNotifier,
) -> None:
    if minute.is_published:
        background_tasks.add_task(notifier.notify_in_background, minute)
        logger.info("Minute notification scheduled", minute_id=minute.id)


@router.get("", response_model=list[Minute])
async def list_minutes(
    status: MinuteStatus | None = Query(default=None),
    project_id: str | None = Query(default=None, alias="projectId"),
    q: str | None = Query(default=None, description="Case-insensitive title search"),
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> list[Minute]:
    """List the minutes visible to the caller, newest meeting first."""
    minutes = visible_minutes(user, await repos.minutes.list_all())
    if status is not None:
        minutes = [m for m in minutes if m.status == status]
    if project_id:
        minutes = [m for m in minutes if project_id in m.project_ids]
    if q:
        needle = q.lower()
        minutes = [m for m in minutes if needle in m.title.lower()]
    return [await _with_participants(m, repos) for m in minutes]


@router.get("/{minute_id}", response_model=Minute)
async def get_minute(
    minute_id: str,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> Minute:
    """Get a minute by id."""
    minute = await _get_minute_or_404(minute_id, repos)
    if not can_view_minute(user, minute):
        raise HTTPException(status_code=403, detail="Not authorized")
    return await _with_participants(minute, repos)


@router.get("/{minute_id}/tasks", response_model=list[Task])
async def list_minute_tasks(
    minute_id: str,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> list[Task]:
    """Get the stored tasks of a minute."""
    minute = await _get_minute_or_404(minute_id, repos)
    if not can_view_minute(user, minute):
        raise HTTPException(status_code=403, detail="Not authorized")
    return await repos.tasks.list_for_minute(minute_id)


@router.post("", response_model=Minute)
async def create_minute(
    background_tasks: BackgroundTasks,
    payload: dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
    notifier: MinuteNotifier = Depends(get_notifier),
) -> Minute:
    """Create a minute.

    The caller becomes the creator and the minute gets the next
    sequential number. A ``tasks`` list in the body is stored in the
    tasks table. Id and participants are assigned by the server.
    """
    data, tasks = _split_tasks(payload)
    for key in ("id", "participants"):
        data.pop(key, None)
    try:
        minute = Minute.model_validate(data)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        )
    minute.created_by = user.id
    minute.number = 0

    minute = await repos.minutes.create(await _fill_mentions(minute, repos))
    if tasks is not None:
        await repos.tasks.replace_for_minute(minute.id, tasks)
    logger.info("Minute created", minute_id=minute.id, number=minute.number)

    _schedule_notification(minute, background_tasks, notifier)
    return await _with_participants(minute, repos)


@router.put("/{minute_id}", response_model=Minute)
async def update_minute(
    minute_id: str,
    background_tasks: BackgroundTasks,
    payload: dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
    notifier: MinuteNotifier = Depends(get_notifier),
) -> Minute:
    """Update a minute (creator or admin).

    When the body carries ``tasks`` they replace the stored tasks of the
    minute. Number and creator never change.
    """
    existing = await _get_minute_or_404(minute_id, repos)
    if not can_edit_minute(user, existing):
        raise HTTPException(status_code=403, detail="Not authorized")

    data, tasks = _split_tasks(payload)
    for key in ("number", "createdBy", "created_by", "participants"):
        data.pop(key, None)

    minute = await _fill_mentions(apply_update(existing, data), repos)
    saved = await repos.minutes.update(minute)
    if saved is None:
        raise HTTPException(status_code=404, detail="Minute not found")
    if tasks is not None:
        await repos.tasks.replace_for_minute(minute_id, tasks)
    logger.info("Minute updated", minute_id=minute_id, status=saved.status.value)

    _schedule_notification(saved, background_tasks, notifier)
    return await _with_participants(saved, repos)


@router.delete("/{minute_id}")
async def delete_minute(
    minute_id: str,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> dict[str, str]:
    """Delete a minute and its stored tasks (creator or admin)."""
    minute = await _get_minute_or_404(minute_id, repos)
    if not can_edit_minute(user, minute):
        raise HTTPException(status_code=403, detail="Not authorized")

    deleted_tasks = await repos.tasks.delete_for_minute(minute_id)
    await repos.minutes.delete(minute_id)
    logger.info("Minute deleted", minute_id=minute_id, deleted_tasks=deleted_tasks)
    return {"message": "Minute and related tasks deleted"}
