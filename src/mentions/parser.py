"""Mention parsing for minute text.

``@Name`` mentions a registered user and ``#Name`` a project. Names may
contain spaces, so matching is done against the known names (longest
first) rather than with a free-form token pattern.
"""

import re
from collections.abc import Iterable
from typing import Literal

from pydantic import ConfigDict, Field

from src.models.base import ApiModel
from src.models.minute import ExternalMention, Minute
from src.models.user import Project, User

USER_SYMBOL = "@"
PROJECT_SYMBOL = "#"
DEFAULT_PROJECT_COLOR = "#22c55e"


class MentionSet(ApiModel):
    """Ids referenced by the mentions in a text."""

    user_ids: list[str] = Field(default_factory=list)
    project_ids: list[str] = Field(default_factory=list)


class TextSegment(ApiModel):
    """A run of text, either plain or a highlighted mention."""

    # Segment text is kept verbatim, surrounding spaces included
    model_config = ConfigDict(str_strip_whitespace=False)

    kind: Literal["text", "user", "external", "project"]
    text: str
    ref_id: str | None = None
    color: str | None = None


def _mention_pattern(symbol: str, name: str) -> re.Pattern[str]:
    return re.compile(r"(?<!\w)" + re.escape(symbol + name) + r"(?!\w)", re.IGNORECASE)


def find_mentions(text: str, symbol: str, names: Iterable[str]) -> list[str]:
    """Names that appear in ``text`` prefixed by ``symbol``.

    Matching is case-insensitive. The symbol must not follow a word
    character, so ``bob@ana.com`` is not a mention, and the name must end
    at a word boundary. Longer names win, so ``@Ana Maria`` is not also
    reported as ``@Ana``.

    Returns:
        Matched names (as given in ``names``) in order of appearance
    """
    found: list[tuple[int, str]] = []
    taken: list[tuple[int, int]] = []
    for name in sorted({n for n in names if n}, key=len, reverse=True):
        for match in _mention_pattern(symbol, name).finditer(text):
            start, end = match.span()
            if any(start < t_end and t_start < end for t_start, t_end in taken):
                continue
            taken.append((start, end))
            found.append((start, name))

    ordered: list[str] = []
    for _, name in sorted(found):
        if name not in ordered:
            ordered.append(name)
    return ordered


def resolve_mentions(
    text: str,
    users: Iterable[User],
    projects: Iterable[Project],
) -> MentionSet:
    """Resolve ``@user`` and ``#project`` mentions in ``text`` to ids."""
    users_by_name = {u.name.lower(): u.id for u in users}
    projects_by_name = {p.name.lower(): p.id for p in projects}

    user_names = find_mentions(text, USER_SYMBOL, list(users_by_name))
    project_names = find_mentions(text, PROJECT_SYMBOL, list(projects_by_name))
    return MentionSet(
        user_ids=[users_by_name[name] for name in user_names],
        project_ids=[projects_by_name[name] for name in project_names],
    )


def segment_text(
    text: str,
    *,
    mentions: list[str],
    project_ids: list[str],
    external_mentions: list[ExternalMention],
    users: Iterable[User],
    projects: Iterable[Project],
) -> list[TextSegment]:
    """Split text into plain runs and highlighted mentions.

    Mentions are located in order: users, then external people, then
    projects; each one is searched after the end of the previous match,
    and mentions that cannot be found there are left as plain text.
    """
    if not mentions and not project_ids and not external_mentions:
        return [TextSegment(kind="text", text=text)]

    users_by_id = {u.id: u for u in users}
    projects_by_id = {p.id: p for p in projects}

    wanted: list[tuple[str, str, str, str | None]] = []
    for user_id in mentions:
        if user := users_by_id.get(user_id):
            wanted.append(("user", USER_SYMBOL + user.name, user.id, None))
    for external in external_mentions:
        wanted.append(("external", USER_SYMBOL + external.name, external.id, None))
    for project_id in project_ids:
        if project := projects_by_id.get(project_id):
            color = project.color or DEFAULT_PROJECT_COLOR
            wanted.append(("project", PROJECT_SYMBOL + project.name, project.id, color))

    segments: list[TextSegment] = []
    cursor = 0
    for kind, mention, ref_id, color in wanted:
        index = text.find(mention, cursor)
        if index == -1:
            continue
        if index > cursor:
            segments.append(TextSegment(kind="text", text=text[cursor:index]))
        segments.append(
            TextSegment(kind=kind, text=mention, ref_id=ref_id, color=color)
        )
        cursor = index + len(mention)

    if cursor < len(text):
        segments.append(TextSegment(kind="text", text=text[cursor:]))
    return segments or [TextSegment(kind="text", text=text)]


def remove_mention(text: str, symbol: str, name: str) -> str:
    """Remove every ``symbol + name`` mention from ``text``."""
    cleaned = _mention_pattern(symbol, name).sub("", text)
    return re.sub(r"\s{2,}", " ", cleaned).strip()


def fill_minute_mentions(
    minute: Minute,
    users: Iterable[User],
    projects: Iterable[Project],
) -> Minute:
    """Fill mentions of items that carry text but no explicit mentions.

    Items that already list mentions or project ids are left untouched.
    """
    users = list(users)
    projects = list(projects)
    for item in minute.iter_items():
        if not item.text or item.mentions or item.project_ids:
            continue
        found = resolve_mentions(item.text, users, projects)
        item.mentions = found.user_ids
        item.project_ids = found.project_ids
    return minute
