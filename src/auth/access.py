"""Visibility and edit rules for minutes and projects."""

from collections.abc import Iterable

from src.models.minute import Minute
from src.models.user import Project, User


def can_view_minute(user: User, minute: Minute) -> bool:
    """Check whether a user may see a minute.

    - Admins see every minute.
    - Limited-access users see minutes tied to one of their projects;
      minutes without projects fall through to the rules below.
    - Everyone sees minutes they created or participate in.
    """
    if user.is_admin:
        return True
    if user.has_limited_access and minute.project_ids:
        return bool(set(minute.project_ids) & set(user.project_ids))
    return minute.created_by == user.id or user.id in minute.participant_ids


def can_edit_minute(user: User, minute: Minute) -> bool:
    """Only admins and the creator may change or delete a minute."""
    return user.is_admin or minute.created_by == user.id


def visible_minutes(user: User, minutes: Iterable[Minute]) -> list[Minute]:
    """Minutes the user may see, newest meeting first."""
    allowed = [m for m in minutes if can_view_minute(user, m)]
    return sorted(
        allowed,
        key=lambda m: (m.meeting_date, m.meeting_time, m.number),
        reverse=True,
    )


def visible_projects(user: User, projects: Iterable[Project]) -> list[Project]:
    """Projects the user may see."""
    if user.is_admin or not user.has_limited_access:
        return list(projects)
    return [p for p in projects if p.id in user.project_ids]
