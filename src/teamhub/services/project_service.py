"""Project service - projects, membership and project chat."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.exceptions import ConflictError, DomainValidationError, NotFoundError
from src.teamhub.core.logging import get_logger
from src.teamhub.models import Message, Project, ProjectMember, ProjectRole, User
from src.teamhub.models.base import utc_now
from src.teamhub.repositories import (
    MessageRepository,
    ProjectMemberRepository,
    ProjectRepository,
    UserRepository,
)
from src.teamhub.schemas.pagination import PaginatedResponse
from src.teamhub.schemas.project import (
    MemberAdd,
    MemberRead,
    MessageCreate,
    MessageRead,
    ProjectCounts,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from src.teamhub.services.project_access import ProjectAccess

logger = get_logger(__name__)

OWNER_SPECIALTY = "총괄"


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        member_repo: ProjectMemberRepository,
        message_repo: MessageRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.message_repo = message_repo
        self.user_repo = user_repo
        self.session = session
        self.access = ProjectAccess(project_repo, member_repo)

    async def _read(self, project: Project) -> ProjectRead:
        read = ProjectRead.model_validate(project)
        read.counts = ProjectCounts(**await self.project_repo.get_counts(project.id))
        return read

    async def list_projects(
        self,
        user: User,
        cursor: str | None,
        limit: int,
        search: str | None = None,
        mine_only: bool = False,
    ) -> PaginatedResponse[ProjectRead]:
        projects, next_cursor, has_more = await self.project_repo.list_projects(
            cursor,
            limit,
            search=search,
            member_id=user.id if mine_only else None,
        )
        return PaginatedResponse(
            items=[await self._read(p) for p in projects],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def get_project(self, project_id: UUID) -> ProjectRead:
        return await self._read(await self.access.get_project(project_id))

    async def create_project(self, data: ProjectCreate, owner: User) -> ProjectRead:
        """Create a project and enrol its owner as a member in one transaction."""
        project = Project(
            owner_id=owner.id,
            **data.model_dump(exclude={"status"}),
            status=data.status.value,
        )
        self.project_repo.add(project)
        try:
            await self.session.flush()
            self.member_repo.add(
                ProjectMember(
                    project_id=project.id,
                    user_id=owner.id,
                    role=ProjectRole.OWNER.value,
                    specialty=OWNER_SPECIALTY,
                )
            )
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project created", project_id=str(project.id), owner_id=str(owner.id))
        return await self._read(project)

    async def update_project(self, project_id: UUID, data: ProjectUpdate, user: User) -> ProjectRead:
        project = await self.access.require_permission(project_id, user, "edit")

        update_data = data.model_dump(exclude_unset=True)
        if "name" in update_data and update_data["name"] is None:
            raise DomainValidationError("Project name cannot be removed")
        if "status" in update_data:
            if update_data["status"] is None:
                raise DomainValidationError("Project status cannot be removed")
            update_data["status"] = update_data["status"].value

        for field, value in update_data.items():
            setattr(project, field, value)
        if project.start_date and project.end_date and project.start_date > project.end_date:
            raise DomainValidationError("start_date must not be after end_date")

        project.updated_at = utc_now()
        try:
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise
        return await self._read(project)

    async def delete_project(self, project_id: UUID, user: User) -> dict[str, int]:
        """Delete a project and everything scoped to it, all or nothing.

        Returns:
            Number of removed rows per dependent table
        """
        project = await self.access.require_permission(project_id, user, "delete")

        removed: dict[str, int] = {}
        try:
            for model in ProjectRepository.DEPENDENT_MODELS:
                removed[model.__tablename__] = await self.project_repo.delete_dependents(  # type: ignore[attr-defined]
                    model, project.id
                )
            await self.project_repo.delete_by_id(project.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.exception("Project delete rolled back", project_id=str(project_id))
            raise

        logger.info(
            "Project deleted",
            project_id=str(project_id),
            deleted_by=str(user.id),
            **removed,
        )
        return removed

    # --- Members ---

    async def list_members(self, project_id: UUID) -> list[MemberRead]:
        await self.access.get_project(project_id)
        members = await self.member_repo.list_for_project(project_id)
        users = await self.user_repo.get_many({m.user_id for m in members})
        return [self._member_read(m, users.get(m.user_id)) for m in members]

    @staticmethod
    def _member_read(member: ProjectMember, user: User | None) -> MemberRead:
        return MemberRead(
            id=member.id,
            project_id=member.project_id,
            user_id=member.user_id,
            role=member.role,
            specialty=member.specialty,
            joined_at=member.joined_at,
            user_name=user.name if user else None,
            user_email=user.email if user else None,
        )

    async def add_member(self, project_id: UUID, data: MemberAdd, actor: User) -> MemberRead:
        project = await self.access.require_permission(project_id, actor, "edit")

        user = await self.user_repo.get_by_id(data.user_id)
        if user is None or not user.is_active:
            raise NotFoundError("User not found")
        if await self.member_repo.get_membership(project.id, user.id) is not None:
            raise ConflictError("User is already a member of this project")

        member = ProjectMember(
            project_id=project.id,
            user_id=user.id,
            role=data.role.value,
            specialty=data.specialty,
        )
        self.member_repo.add(member)
        try:
            await self.session.commit()
            await self.session.refresh(member)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("User is already a member of this project") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project member added", project_id=str(project.id), user_id=str(user.id))
        return self._member_read(member, user)

    async def remove_member(self, project_id: UUID, user_id: UUID, actor: User) -> None:
        project = await self.access.require_permission(project_id, actor, "edit")
        if user_id == project.owner_id:
            raise DomainValidationError("The project owner cannot be removed")

        member = await self.member_repo.get_membership(project.id, user_id)
        if member is None:
            raise NotFoundError("Member not found")

        try:
            await self.member_repo.delete(member)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Project member removed", project_id=str(project.id), user_id=str(user_id))

    # --- Chat ---

    async def list_messages(
        self, project_id: UUID, user: User, cursor: str | None, limit: int
    ) -> PaginatedResponse[MessageRead]:
        await self.access.require_contributor(project_id, user)
        messages, next_cursor, has_more = await self.message_repo.list_for_project(
            project_id, cursor, limit
        )
        return PaginatedResponse(
            items=[MessageRead.model_validate(m) for m in messages],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def post_message(self, project_id: UUID, data: MessageCreate, user: User) -> Message:
        await self.access.require_contributor(project_id, user)
        message = Message(project_id=project_id, author_id=user.id, content=data.content)
        self.message_repo.add(message)
        try:
            await self.session.commit()
            await self.session.refresh(message)
        except Exception:
            await self.session.rollback()
            raise
        return message
