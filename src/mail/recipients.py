"""Resolve the email recipients of a minute notification."""

from typing import Protocol, runtime_checkable

import structlog

from src.models.minute import Minute
from src.models.user import UserEmail

logger = structlog.get_logger()


@runtime_checkable
class UserEmailLookup(Protocol):
    """Capability to find registered users' emails by id."""

    async def find_emails_by_ids(self, user_ids: set[str]) -> list[UserEmail]:
        """Return id and email of every user whose id is in ``user_ids``."""
        ...


async def gather_recipient_emails(
    minute: Minute,
    user_lookup: UserEmailLookup | None,
) -> list[str]:
    """Collect the unique email addresses to notify about a minute.

    Participants are resolved through ``user_lookup`` (only when the
    minute has participant ids); occasional participants and informed
    persons contribute their own emails. Entries without an email are
    skipped. A failing lookup is logged and treated as no participants.

    Args:
        minute: Minute being notified
        user_lookup: User store, or None to skip participant resolution

    Returns:
        Deduplicated addresses in first-seen order
    """
    candidates: list[str | None] = []

    if minute.participant_ids and user_lookup is not None:
        try:
            users = await user_lookup.find_emails_by_ids(set(minute.participant_ids))
        except Exception as e:
            logger.error(
                "Error fetching users for email recipients",
                minute_id=minute.id,
                error=str(e),
            )
        else:
            candidates.extend(user.email for user in users)

    candidates.extend(p.email for p in minute.occasional_participants)
    candidates.extend(p.email for p in minute.informed_persons)

    seen: set[str] = set()
    recipients: list[str] = []
    for email in candidates:
        address = (email or "").strip()
        if address and address not in seen:
            seen.add(address)
            recipients.append(address)
    return recipients
