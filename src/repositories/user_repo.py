"""Repository for user accounts.

Stores users as JSON documents with the email and password hash in
their own columns, so lookups by email and credential checks never
deserialize other users.
"""

from typing import Any

from src.models.user import User, UserEmail
from src.repositories.base import EntityRepository


class UserRepository(EntityRepository[User]):
    """Repository for users and their password hashes."""

    table = "users"
    model = User
    extra_columns = {
        "email": "TEXT NOT NULL UNIQUE",
        "password_hash": "TEXT",
    }

    def _column_values(self, entity: User) -> dict[str, Any]:
        return {"email": entity.email.lower()}

    async def create_with_password(self, user: User, password_hash: str) -> User:
        """Insert a user together with its password hash."""
        await self.create(user)
        await self.set_password_hash(user.id, password_hash)
        return user

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email (case-insensitive)."""
        row = await self._db.fetch_one(
            "SELECT data FROM users WHERE email = ?",
            [email.strip().lower()],
        )
        return self._deserialize(row["data"]) if row else None

    async def get_password_hash(self, user_id: str) -> str | None:
        """Get the stored password hash for a user."""
        row = await self._db.fetch_one(
            "SELECT password_hash FROM users WHERE id = ?",
            [user_id],
        )
        return row["password_hash"] if row else None

    async def set_password_hash(self, user_id: str, password_hash: str) -> bool:
        """Replace a user's password hash.

        Returns:
            True if the user exists and was updated
        """
        result = await self._db.execute(
            "UPDATE users SET password_hash = ? WHERE id = ?",
            [password_hash, user_id],
        )
        return result.rows_affected > 0

    async def find_emails_by_ids(self, user_ids: set[str]) -> list[UserEmail]:
        """Find users whose id is in ``user_ids``, returning id and email only.

        Used by the notification pipeline to resolve participant emails.
        """
        users = await self.get_many(sorted(user_ids))
        return [UserEmail(id=user.id, email=str(user.email)) for user in users]
