"""API router aggregation."""

from fastapi import APIRouter

from src.api.auth import router as auth_router
from src.api.catalog import (
    attachments_router,
    global_topic_groups_router,
    projects_router,
    tags_router,
    tasks_router,
    templates_router,
)
from src.api.email import router as email_router
from src.api.health import router as health_router
from src.api.mentions import router as mentions_router
from src.api.minutes import router as minutes_router
from src.api.users import router as users_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(minutes_router)
# Plain CRUD resources
api_router.include_router(projects_router)
api_router.include_router(tags_router)
api_router.include_router(tasks_router)
api_router.include_router(attachments_router)
api_router.include_router(templates_router)
api_router.include_router(global_topic_groups_router)
# Editor helpers and mail diagnostics
api_router.include_router(mentions_router)
api_router.include_router(email_router)
