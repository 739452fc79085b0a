"""Project-scoped authorization shared by the project and work item services."""

from uuid import UUID

from src.teamhub.core.exceptions import NotFoundError, PermissionDeniedError
from src.teamhub.core.permissions import ResourceAction, has_project_permission, is_admin
from src.teamhub.models import Project, ProjectRole, User
from src.teamhub.repositories import ProjectMemberRepository, ProjectRepository


class ProjectAccess:
    def __init__(self, project_repo: ProjectRepository, member_repo: ProjectMemberRepository):
        self.project_repo = project_repo
        self.member_repo = member_repo

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def is_contributor(self, project: Project, user: User) -> bool:
        """Owners, members and admins may write project-scoped records."""
        if is_admin(user.access_level) or project.owner_id == user.id:
            return True
        return await self.member_repo.get_membership(project.id, user.id) is not None

    async def require_contributor(self, project_id: UUID, user: User) -> Project:
        project = await self.get_project(project_id)
        if not await self.is_contributor(project, user):
            raise PermissionDeniedError("Only project members can change this project")
        return project

    async def require_permission(
        self, project_id: UUID, user: User, action: ResourceAction
    ) -> Project:
        """Check a project action; project admins may also edit."""
        project = await self.get_project(project_id)
        if has_project_permission(user.access_level, action, project.owner_id, user.id):
            return project
        if action == "edit":
            membership = await self.member_repo.get_membership(project.id, user.id)
            if membership is not None and membership.role == ProjectRole.ADMIN.value:
                return project
        raise PermissionDeniedError(f"You do not have permission to {action} this project")
