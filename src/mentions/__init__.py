"""Parsing of @user and #project mentions in minute text."""

from src.mentions.parser import (
    MentionSet,
    TextSegment,
    fill_minute_mentions,
    find_mentions,
    remove_mention,
    resolve_mentions,
    segment_text,
)

__all__ = [
    "MentionSet",
    "TextSegment",
    "fill_minute_mentions",
    "find_mentions",
    "remove_mention",
    "resolve_mentions",
    "segment_text",
]
