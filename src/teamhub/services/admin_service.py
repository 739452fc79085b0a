"""Admin service - user level changes and (de)activation, with an audit trail."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.exceptions import (
    DomainValidationError,
    NotFoundError,
    PermissionDeniedError,
)
from src.teamhub.core.logging import get_logger
from src.teamhub.core.permissions import AccessLevel, can_modify_user, is_super_admin
from src.teamhub.models import User, UserManagementAction, UserManagementLog
from src.teamhub.models.base import utc_now
from src.teamhub.repositories import UserManagementLogRepository, UserRepository
from src.teamhub.schemas.admin import UserManagementLogRead

logger = get_logger(__name__)

RECENT_LOG_LIMIT = 100


class AdminService:
    """Service for user administration.

    Every mutation writes a UserManagementLog row in the same transaction.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        log_repo: UserManagementLogRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.log_repo = log_repo
        self.session = session

    async def list_users(self) -> list[User]:
        return await self.user_repo.list_for_admin()

    async def _load_target(self, actor: User, target_id: UUID) -> User:
        target = await self.user_repo.get_for_update(target_id)
        if target is None:
            raise NotFoundError("User not found")
        if not can_modify_user(actor.id, actor.access_level, target.id, target.access_level):
            raise PermissionDeniedError("You cannot modify this user")
        return target

    async def change_level(
        self,
        actor: User,
        target_id: UUID,
        new_level: AccessLevel,
        reason: str | None = None,
    ) -> User:
        """Change a user's access level.

        Args:
            actor: The administrator performing the change
            target_id: User whose level changes
            new_level: Level to assign
            reason: Optional free-text justification, kept in the log

        Returns:
            The updated user

        Raises:
            NotFoundError: If the target does not exist
            PermissionDeniedError: If the actor may not modify the target
            DomainValidationError: If the target is a super-admin or already at that level
        """
        try:
            target = await self._load_target(actor, target_id)
            if is_super_admin(target.access_level):
                raise DomainValidationError("A super-admin cannot be demoted")
            if target.access_level == new_level:
                raise DomainValidationError("User already has this access level")

            old_level = target.access_level
            target.access_level = int(new_level)
            target.updated_at = utc_now()
            self.log_repo.add(
                UserManagementLog(
                    admin_id=actor.id,
                    target_user_id=target.id,
                    action=UserManagementAction.LEVEL_CHANGE.value,
                    old_level=old_level,
                    new_level=int(new_level),
                    reason=reason,
                )
            )
            await self.session.commit()
            await self.session.refresh(target)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "User level changed",
            admin_id=str(actor.id),
            target_user_id=str(target.id),
            old_level=old_level,
            new_level=int(new_level),
        )
        return target

    async def toggle_active(self, actor: User, target_id: UUID, reason: str | None = None) -> User:
        """Flip a user's active flag.

        Raises:
            NotFoundError: If the target does not exist
            PermissionDeniedError: If the actor may not modify the target
            DomainValidationError: If actors try to deactivate themselves
        """
        try:
            target = await self._load_target(actor, target_id)
            if target.id == actor.id:
                raise DomainValidationError("You cannot deactivate your own account")

            target.is_active = not target.is_active
            target.updated_at = utc_now()
            action = (
                UserManagementAction.ACTIVATE
                if target.is_active
                else UserManagementAction.DEACTIVATE
            )
            self.log_repo.add(
                UserManagementLog(
                    admin_id=actor.id,
                    target_user_id=target.id,
                    action=action.value,
                    old_level=target.access_level,
                    new_level=target.access_level,
                    reason=reason,
                )
            )
            await self.session.commit()
            await self.session.refresh(target)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "User active flag changed",
            admin_id=str(actor.id),
            target_user_id=str(target.id),
            is_active=target.is_active,
        )
        return target

    async def recent_logs(self) -> list[UserManagementLogRead]:
        """The newest management log entries, with actor and target names resolved."""
        logs = await self.log_repo.list_recent(RECENT_LOG_LIMIT)
        user_ids = {log.admin_id for log in logs} | {log.target_user_id for log in logs}
        users = await self.user_repo.get_many(user_ids)

        result = []
        for log in logs:
            item = UserManagementLogRead.model_validate(log)
            admin = users.get(log.admin_id)
            target = users.get(log.target_user_id)
            item.admin_name = admin.name if admin else None
            item.target_user_name = target.name if target else None
            result.append(item)
        return result
