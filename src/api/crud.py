"""Router factory for plain CRUD resources.

Projects, tags, tasks, attachments, templates and global topic groups
all expose the same five endpoints over an EntityRepository; this module
builds those routers instead of repeating them per resource.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from src.api.deps import get_current_user, get_repositories
from src.models.base import ApiModel
from src.models.user import User
from src.repositories import EntityRepository, Repositories

ModelT = TypeVar("ModelT", bound=ApiModel)

ListFilter = Callable[[User, list[Any]], list[Any]]

# Fields a client can never overwrite through an update
_PROTECTED_FIELDS = {"id", "created_at", "updated_at"}


def apply_update(entity: ModelT, payload: dict[str, Any]) -> ModelT:
    """Return a copy of ``entity`` with the fields in ``payload`` replaced.

    ``payload`` may use snake_case names or camelCase aliases.

    Raises:
        HTTPException: 422 if the merged entity is invalid
    """
    model = type(entity)
    fields = model.model_fields
    alias_to_name = {f.alias: name for name, f in fields.items() if f.alias}

    data = entity.model_dump()
    for key, value in payload.items():
        name = alias_to_name.get(key, key)
        if name in fields and name not in _PROTECTED_FIELDS:
            data[name] = value
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        )


def build_crud_router(
    *,
    prefix: str,
    tag: str,
    repo_name: str,
    model: type[ModelT],
    label: str,
    list_filter: ListFilter | None = None,
) -> APIRouter:
    """Build list/get/create/update/delete endpoints for one resource.

    Args:
        prefix: URL prefix, e.g. "/api/tags"
        tag: OpenAPI tag
        repo_name: Attribute of Repositories holding the repository
        model: Entity model used for bodies and responses
        label: Human name used in messages, e.g. "Tag"
        list_filter: Optional visibility filter applied to list results

    Returns:
        APIRouter requiring an authenticated user on every endpoint
    """
    router = APIRouter(prefix=prefix, tags=[tag])

    def repository(repos: Repositories) -> EntityRepository:
        return getattr(repos, repo_name)

    @router.get("", response_model=list[model])
    async def list_entities(
        user: User = Depends(get_current_user),
        repos: Repositories = Depends(get_repositories),
    ):
        entities = await repository(repos).list_all()
        if list_filter is not None:
            entities = list_filter(user, entities)
        return entities

    @router.get("/{entity_id}", response_model=model)
    async def get_entity(
        entity_id: str,
        user: User = Depends(get_current_user),
        repos: Repositories = Depends(get_repositories),
    ):
        entity = await repository(repos).get(entity_id)
        if entity is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return entity

    @router.post("", response_model=model)
    async def create_entity(
        payload: model,
        user: User = Depends(get_current_user),
        repos: Repositories = Depends(get_repositories),
    ):
        if "created_by" in model.model_fields and payload.created_by is None:
            payload.created_by = user.id
        if await repository(repos).get(payload.id) is not None:
            raise HTTPException(status_code=409, detail=f"{label} already exists")
        return await repository(repos).create(payload)

    @router.put("/{entity_id}", response_model=model)
    async def update_entity(
        entity_id: str,
        payload: dict[str, Any] = Body(...),
        user: User = Depends(get_current_user),
        repos: Repositories = Depends(get_repositories),
    ):
        repo = repository(repos)
        existing = await repo.get(entity_id)
        if existing is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        updated = await repo.update(apply_update(existing, payload))
        if updated is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return updated

    @router.delete("/{entity_id}")
    async def delete_entity(
        entity_id: str,
        user: User = Depends(get_current_user),
        repos: Repositories = Depends(get_repositories),
    ) -> dict[str, str]:
        if not await repository(repos).delete(entity_id):
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return {"message": f"{label} deleted"}

    return router
