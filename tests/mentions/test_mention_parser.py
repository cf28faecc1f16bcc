"""Tests for mention parsing."""

import pytest

from src.mentions.parser import (
    DEFAULT_PROJECT_COLOR,
    find_mentions,
    fill_minute_mentions,
    remove_mention,
    resolve_mentions,
    segment_text,
)
from src.models.minute import ExternalMention, Minute, MinuteItem, Task, TopicGroup
from src.models.user import Project, User


@pytest.fixture
def users() -> list[User]:
    return [
        User(id="u1", name="Ana", email="ana@example.com"),
        User(id="u2", name="Ana Maria", email="anamaria@example.com"),
        User(id="u3", name="Luis", email="luis@example.com"),
    ]


@pytest.fixture
def projects() -> list[Project]:
    return [
        Project(id="p1", name="Apollo", color="#ff0000"),
        Project(id="p2", name="Data Lake"),
    ]


class TestFindMentions:
    """Tests for find_mentions."""

    def test_longest_name_wins(self):
        names = find_mentions("Ask @Ana Maria and @Ana", "@", ["Ana", "Ana Maria"])

        assert names == ["Ana Maria", "Ana"]

    def test_case_insensitive_with_word_boundary(self):
        assert find_mentions("cc @luis.", "@", ["Luis"]) == ["Luis"]
        assert find_mentions("cc @Luisa", "@", ["Luis"]) == []

    def test_order_of_appearance_without_duplicates(self):
        text = "#Data Lake then #Apollo then #Data Lake"

        assert find_mentions(text, "#", ["Apollo", "Data Lake"]) == [
            "Data Lake",
            "Apollo",
        ]

    def test_symbol_must_match(self):
        assert find_mentions("#Ana", "@", ["Ana"]) == []

    def test_symbol_inside_a_word_is_not_a_mention(self):
        assert find_mentions("Write to bob@ana.com", "@", ["Ana"]) == []
        assert find_mentions("issue#Apollo", "#", ["Apollo"]) == []
        assert find_mentions("(@Ana) and @Ana", "@", ["Ana"]) == ["Ana"]


class TestResolveMentions:
    """Tests for resolve_mentions."""

    def test_resolves_users_and_projects(self, users, projects):
        found = resolve_mentions("@Luis owns #apollo with @Ana Maria", users, projects)

        assert found.user_ids == ["u3", "u2"]
        assert found.project_ids == ["p1"]

    def test_unknown_names_are_ignored(self, users, projects):
        found = resolve_mentions("@Nobody on #Mars", users, projects)

        assert found.user_ids == []
        assert found.project_ids == []


class TestSegmentText:
    """Tests for segment_text."""

    def test_plain_text_without_mentions(self, users, projects):
        segments = segment_text(
            "just text",
            mentions=[],
            project_ids=[],
            external_mentions=[],
            users=users,
            projects=projects,
        )

        assert [(s.kind, s.text) for s in segments] == [("text", "just text")]

    def test_users_externals_then_projects(self, users, projects):
        segments = segment_text(
            "@Luis and @Carla review #Apollo now",
            mentions=["u3"],
            project_ids=["p1"],
            external_mentions=[ExternalMention(id="e1", name="Carla")],
            users=users,
            projects=projects,
        )

        assert [(s.kind, s.text) for s in segments] == [
            ("user", "@Luis"),
            ("text", " and "),
            ("external", "@Carla"),
            ("text", " review "),
            ("project", "#Apollo"),
            ("text", " now"),
        ]
        assert segments[0].ref_id == "u3"
        assert segments[4].color == "#ff0000"

    def test_project_without_color_uses_default(self, users, projects):
        segments = segment_text(
            "#Data Lake",
            mentions=[],
            project_ids=["p2"],
            external_mentions=[],
            users=users,
            projects=projects,
        )

        assert segments[0].kind == "project"
        assert segments[0].color == DEFAULT_PROJECT_COLOR

    def test_mention_not_found_after_cursor_stays_plain(self, users, projects):
        segments = segment_text(
            "#Apollo then @Luis",
            mentions=["u3"],
            project_ids=["p1"],
            external_mentions=[],
            users=users,
            projects=projects,
        )

        # Projects are searched after the user match, so #Apollo stays text
        assert [(s.kind, s.text) for s in segments] == [
            ("text", "#Apollo then "),
            ("user", "@Luis"),
        ]


class TestRemoveMention:
    """Tests for remove_mention."""

    def test_removes_and_collapses_spaces(self):
        assert remove_mention("Talk to @Ana Maria today", "@", "Ana Maria") == (
            "Talk to today"
        )

    def test_keeps_longer_names(self):
        assert remove_mention("@Luisa and @Luis", "@", "Luis") == "@Luisa and"


class TestFillMinuteMentions:
    """Tests for fill_minute_mentions."""

    def test_fills_only_items_without_explicit_mentions(self, users, projects):
        minute = Minute(
            topics_discussed=[MinuteItem(text="@Luis on #Apollo")],
            decisions=[MinuteItem(text="@Ana decides", mentions=["u3"])],
            topic_groups=[
                TopicGroup(name="Ops", pending_tasks=[Task(text="@Ana Maria deploys")])
            ],
        )

        fill_minute_mentions(minute, users, projects)

        assert minute.topics_discussed[0].mentions == ["u3"]
        assert minute.topics_discussed[0].project_ids == ["p1"]
        assert minute.decisions[0].mentions == ["u3"]
        assert minute.topic_groups[0].pending_tasks[0].mentions == ["u2"]

    def test_email_addresses_are_not_mentions(self, users, projects):
        minute = Minute(topics_discussed=[MinuteItem(text="Write to bob@ana.com today")])

        fill_minute_mentions(minute, users, projects)

        assert minute.topics_discussed[0].mentions == []
