from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.exceptions import DomainValidationError
from src.teamhub.core.logging import get_logger
from src.teamhub.core.permissions import get_capabilities, level_label
from src.teamhub.core.security import hash_password, verify_password
from src.teamhub.models import User
from src.teamhub.models.base import utc_now
from src.teamhub.repositories import RefreshTokenRepository, UserRepository
from src.teamhub.schemas.user import (
    PermissionsRead,
    PresenceList,
    PresenceRead,
    ProfileUpdate,
    UserSummary,
)

logger = get_logger(__name__)


class PresenceStatus:
    ONLINE = "online"
    AWAY = "away"
    OFFLINE = "offline"


def describe_presence(
    last_seen_at: datetime | None,
    now: datetime,
    online_window: timedelta,
    away_window: timedelta,
) -> tuple[str, str]:
    """Classify a heartbeat timestamp. Returns (status, human readable text)."""
    if last_seen_at is None:
        return PresenceStatus.OFFLINE, "오프라인"

    elapsed = max(now - last_seen_at, timedelta(0))
    minutes = int(elapsed.total_seconds() // 60)
    if elapsed <= online_window:
        return PresenceStatus.ONLINE, "온라인"
    if elapsed <= away_window:
        return PresenceStatus.AWAY, f"{minutes}분 전"
    if minutes < 60:
        return PresenceStatus.OFFLINE, f"{minutes}분 전"
    if minutes < 1440:
        return PresenceStatus.OFFLINE, f"{minutes // 60}시간 전"
    return PresenceStatus.OFFLINE, f"{minutes // 1440}일 전"


_STATUS_RANK = {PresenceStatus.ONLINE: 0, PresenceStatus.AWAY: 1, PresenceStatus.OFFLINE: 2}


class UserService:
    """Self-service profile operations and the user directory."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_repo: RefreshTokenRepository,
        session: AsyncSession,
        online_window_minutes: int = 5,
        away_window_minutes: int = 30,
    ):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.session = session
        self.online_window = timedelta(minutes=online_window_minutes)
        self.away_window = timedelta(minutes=away_window_minutes)

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        """Update user with provided data."""
        update_data = data.model_dump(exclude_unset=True)
        if "name" in update_data and update_data["name"] is None:
            raise DomainValidationError("Name cannot be removed")

        for field, value in update_data.items():
            setattr(user, field, value)

        user.updated_at = utc_now()
        try:
            await self.session.commit()
            await self.session.refresh(user)
        except Exception:
            await self.session.rollback()
            raise
        return user

    async def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """Replace the password after checking the current one.

        Every other session is signed out.

        Raises:
            DomainValidationError: If the account has no password or the current one is wrong
        """
        if user.hashed_password is None:
            raise DomainValidationError("This account signs in with Google and has no password")
        if not verify_password(current_password, user.hashed_password):
            raise DomainValidationError("Current password is incorrect")
        if current_password == new_password:
            raise DomainValidationError("New password must differ from the current password")

        try:
            user.hashed_password = hash_password(new_password)
            user.updated_at = utc_now()
            await self.token_repo.revoke_all_for_user(user.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Password changed", user_id=str(user.id))

    def permissions(self, user: User) -> PermissionsRead:
        return PermissionsRead(
            access_level=user.access_level,
            level_label=level_label(user.access_level),
            capabilities=get_capabilities(user.access_level).as_dict(),
        )

    async def directory(self) -> list[User]:
        return await self.user_repo.list_active()

    async def heartbeat(self, user: User) -> datetime:
        """Record that the user is active right now."""
        now = utc_now()
        user.last_seen_at = now
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return now

    async def presence(self) -> PresenceList:
        """Presence of every active user, online first, then most recently seen."""
        now = utc_now()
        entries = []
        for user in await self.user_repo.list_active():
            status, text = describe_presence(
                user.last_seen_at, now, self.online_window, self.away_window
            )
            entries.append(
                PresenceRead(
                    user=UserSummary.model_validate(user),
                    status=status,
                    last_seen_at=user.last_seen_at,
                    last_seen_text=text,
                )
            )

        entries.sort(
            key=lambda e: (
                _STATUS_RANK[e.status],
                -(e.last_seen_at.timestamp() if e.last_seen_at else 0.0),
            )
        )
        return PresenceList(
            users=entries,
            online_count=sum(1 for e in entries if e.status == PresenceStatus.ONLINE),
            total_count=len(entries),
        )
