"""Tests for the JSON-document repositories."""

import pytest
from libsql_client import LibsqlError

from src.auth.security import hash_password, verify_password
from src.models.catalog import MinuteTemplate, Tag, TemplateTopicGroup
from src.models.minute import Minute, MinuteItem, MinuteStatus, Task
from src.models.user import User


class TestEntityRepository:
    """Generic behavior, exercised through the tag repository."""

    @pytest.mark.asyncio
    async def test_create_get_list(self, repos):
        first = await repos.tags.create(Tag(name="Urgent", color="#ff0000"))
        second = await repos.tags.create(Tag(name="Later"))

        fetched = await repos.tags.get(first.id)

        assert fetched == first
        assert [t.id for t in await repos.tags.list_all()] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_missing_entity(self, repos):
        assert await repos.tags.get("missing") is None
        assert await repos.tags.update(Tag(id="missing", name="x")) is None
        assert await repos.tags.delete("missing") is False

    @pytest.mark.asyncio
    async def test_update_touches_timestamp(self, repos):
        tag = await repos.tags.create(Tag(name="Urgent"))
        created_at = tag.updated_at

        tag.name = "Critical"
        updated = await repos.tags.update(tag)

        assert updated is not None
        assert updated.updated_at >= created_at
        assert (await repos.tags.get(tag.id)).name == "Critical"

    @pytest.mark.asyncio
    async def test_delete(self, repos):
        tag = await repos.tags.create(Tag(name="Urgent"))

        assert await repos.tags.delete(tag.id) is True
        assert await repos.tags.get(tag.id) is None

    @pytest.mark.asyncio
    async def test_get_many(self, repos):
        a = await repos.tags.create(Tag(name="A"))
        await repos.tags.create(Tag(name="B"))
        c = await repos.tags.create(Tag(name="C"))

        found = await repos.tags.get_many([c.id, a.id, "missing"])

        assert {t.id for t in found} == {a.id, c.id}
        assert await repos.tags.get_many([]) == []

    @pytest.mark.asyncio
    async def test_nested_documents_round_trip(self, repos):
        template = MinuteTemplate(
            name="Retro",
            topic_groups=[TemplateTopicGroup(name="Went well")],
        )
        template.sections.decisions = ["Keep doing"]

        await repos.templates.create(template)
        stored = await repos.templates.get(template.id)

        assert stored.topic_groups[0].name == "Went well"
        assert stored.sections.decisions == ["Keep doing"]


class TestUserRepository:
    """Tests for UserRepository."""

    @pytest.mark.asyncio
    async def test_get_by_email_is_case_insensitive(self, repos, regular_user):
        found = await repos.users.get_by_email("  ANA@Example.com ")

        assert found is not None
        assert found.id == regular_user.id

    @pytest.mark.asyncio
    async def test_password_hash_is_stored_outside_document(self, repos, regular_user):
        stored_hash = await repos.users.get_password_hash(regular_user.id)

        assert verify_password("user-pass", stored_hash)
        assert "password" not in (await repos.users.get(regular_user.id)).model_dump()

    @pytest.mark.asyncio
    async def test_set_password_hash(self, repos, regular_user):
        assert await repos.users.set_password_hash(regular_user.id, hash_password("new"))
        assert verify_password("new", await repos.users.get_password_hash(regular_user.id))
        assert not await repos.users.set_password_hash("missing", "x")

    @pytest.mark.asyncio
    async def test_find_emails_by_ids(self, repos, admin_user, regular_user):
        found = await repos.users.find_emails_by_ids({regular_user.id, "missing"})

        assert [(u.id, u.email) for u in found] == [(regular_user.id, "ana@example.com")]

    @pytest.mark.asyncio
    async def test_email_change_updates_lookup(self, repos, regular_user):
        regular_user.email = "ana.new@example.com"
        await repos.users.update(regular_user)

        assert await repos.users.get_by_email("ana@example.com") is None
        assert (await repos.users.get_by_email("ana.new@example.com")) is not None

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, repos, regular_user):
        with pytest.raises(LibsqlError):
            await repos.users.create(User(name="Other", email="ana@example.com"))


class TestMinuteRepository:
    """Tests for MinuteRepository."""

    @pytest.mark.asyncio
    async def test_assigns_sequential_numbers(self, repos):
        first = await repos.minutes.create(Minute(title="One"))
        second = await repos.minutes.create(Minute(title="Two"))
        explicit = await repos.minutes.create(Minute(title="Imported", number=40))
        after = await repos.minutes.create(Minute(title="Three"))

        assert (first.number, second.number) == (1, 2)
        assert explicit.number == 40
        assert after.number == 41

    @pytest.mark.asyncio
    async def test_participants_are_not_stored(self, repos, regular_user):
        minute = Minute(
            title="Sync",
            participant_ids=[regular_user.id],
            participants=[regular_user],
            status=MinuteStatus.PUBLISHED,
            topics_discussed=[MinuteItem(text="Budget")],
        )
        await repos.minutes.create(minute)

        stored = await repos.minutes.get(minute.id)

        assert stored.participants == []
        assert stored.participant_ids == [regular_user.id]
        assert stored.status == MinuteStatus.PUBLISHED
        assert stored.topics_discussed[0].text == "Budget"


class TestTaskRepository:
    """Tests for TaskRepository."""

    @pytest.mark.asyncio
    async def test_replace_for_minute(self, repos):
        await repos.tasks.replace_for_minute("m1", [Task(text="A"), Task(text="B")])
        await repos.tasks.replace_for_minute("m2", [Task(text="Other")])

        replaced = await repos.tasks.replace_for_minute("m1", [Task(text="C")])

        assert [t.text for t in replaced] == ["C"]
        assert [t.text for t in await repos.tasks.list_for_minute("m1")] == ["C"]
        assert [t.minute_id for t in await repos.tasks.list_for_minute("m2")] == ["m2"]

    @pytest.mark.asyncio
    async def test_delete_for_minute(self, repos):
        await repos.tasks.replace_for_minute("m1", [Task(text="A"), Task(text="B")])

        assert await repos.tasks.delete_for_minute("m1") == 2
        assert await repos.tasks.list_for_minute("m1") == []
