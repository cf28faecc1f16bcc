"""Tests for the mention helper endpoints."""

import pytest
from httpx import AsyncClient

from src.models.user import Project


class TestMentionsApi:
    """Tests for /api/mentions."""

    @pytest.mark.asyncio
    async def test_resolve(self, client: AsyncClient, repos, regular_user, user_headers):
        project = await repos.projects.create(Project(name="Apollo"))

        response = await client.post(
            "/api/mentions/resolve",
            json={"text": "@ana maria owns #Apollo"},
            headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "userIds": [regular_user.id],
            "projectIds": [project.id],
        }

    @pytest.mark.asyncio
    async def test_segments(self, client: AsyncClient, regular_user, user_headers):
        response = await client.post(
            "/api/mentions/segments",
            json={
                "text": "Ask @Ana Maria and @Pat",
                "mentions": [regular_user.id],
                "externalMentions": [{"id": "e1", "name": "Pat"}],
            },
            headers=user_headers,
        )

        segments = response.json()
        assert [(s["kind"], s["text"]) for s in segments] == [
            ("text", "Ask "),
            ("user", "@Ana Maria"),
            ("text", " and "),
            ("external", "@Pat"),
        ]
        assert segments[1]["refId"] == regular_user.id
