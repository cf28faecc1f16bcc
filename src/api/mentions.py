"""Mention resolution endpoints used by the minute editor."""

from fastapi import APIRouter, Depends
from pydantic import ConfigDict, Field

from src.api.deps import get_current_user, get_repositories
from src.mentions.parser import MentionSet, TextSegment, resolve_mentions, segment_text
from src.models.base import ApiModel
from src.models.minute import ExternalMention
from src.models.user import User
from src.repositories import Repositories

router = APIRouter(prefix="/api/mentions", tags=["mentions"])


class ResolveRequest(ApiModel):
    """Text whose mentions should be resolved."""

    text: str = ""


class SegmentRequest(ApiModel):
    """Text plus the mentions already attached to it."""

    model_config = ConfigDict(str_strip_whitespace=False)

    text: str = ""
    mentions: list[str] = Field(default_factory=list)
    project_ids: list[str] = Field(default_factory=list)
    external_mentions: list[ExternalMention] = Field(default_factory=list)


@router.post("/resolve", response_model=MentionSet)
async def resolve(
    payload: ResolveRequest,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> MentionSet:
    """Resolve ``@user`` and ``#project`` mentions to ids."""
    return resolve_mentions(
        payload.text,
        await repos.users.list_all(),
        await repos.projects.list_all(),
    )


@router.post("/segments", response_model=list[TextSegment])
async def segments(
    payload: SegmentRequest,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> list[TextSegment]:
    """Split text into plain and highlighted mention segments."""
    return segment_text(
        payload.text,
        mentions=payload.mentions,
        project_ids=payload.project_ids,
        external_mentions=payload.external_mentions,
        users=await repos.users.list_all(),
        projects=await repos.projects.list_all(),
    )
