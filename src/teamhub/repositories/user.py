"""Repositories for users, refresh tokens and user management logs."""

from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select

from src.teamhub.models import RefreshToken, User, UserManagementLog
from src.teamhub.models.base import utc_now
from src.teamhub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address (case-insensitive)."""
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def get_for_update(self, user_id: UUID) -> User | None:
        """Lock the user row for a read-modify-write inside the current transaction."""
        result = await self.session.execute(
            select(User).where(User.id == user_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def list_for_admin(self) -> list[User]:
        """Every user, most privileged first, newest first within a level."""
        result = await self.session.execute(
            select(User).order_by(User.access_level.asc(), User.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_active(self) -> list[User]:
        result = await self.session.execute(
            select(User)
            .where(User.is_active == True)  # noqa: E712
            .order_by(User.name.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def get_many(self, user_ids: set[UUID]) -> dict[UUID, User]:
        if not user_ids:
            return {}
        result = await self.session.execute(
            select(User).where(User.id.in_(user_ids))  # type: ignore[attr-defined]
        )
        return {user.id: user for user in result.scalars().all()}


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    model = RefreshToken

    async def get_valid_by_hash(
        self, token_hash: str, for_update: bool = False
    ) -> RefreshToken | None:
        """Get a non-revoked, non-expired token by hash.

        Args:
            token_hash: The hashed token to look up
            for_update: Lock the row so concurrent refreshes cannot both rotate it
        """
        query = select(RefreshToken).where(
            RefreshToken.token_hash == token_hash,
            RefreshToken.revoked == False,  # noqa: E712
            RefreshToken.expires_at > utc_now(),
        )
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def revoke_all_for_user(self, user_id: UUID) -> int:
        """Revoke all active refresh tokens of a user. Returns the number revoked."""
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id)  # type: ignore[arg-type]
            .where(RefreshToken.revoked == False)  # type: ignore[arg-type]  # noqa: E712
            .values(revoked=True)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]


class UserManagementLogRepository(BaseRepository[UserManagementLog]):
    model = UserManagementLog

    async def list_recent(self, limit: int = 100) -> list[UserManagementLog]:
        result = await self.session.execute(
            select(UserManagementLog)
            .order_by(UserManagementLog.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())
