"""Test helper functions for common data creation patterns."""

from src.teamhub.core.db import Database
from src.teamhub.core.security import create_access_token
from src.teamhub.models import Project, User
from tests.factories import ProjectFactory, ProjectMemberFactory, UserFactory


async def create_user(database: Database, **user_kwargs) -> User:
    """Create and commit a user.

    Args:
        database: Database to write to
        **user_kwargs: Additional args passed to UserFactory

    Returns:
        The persisted user
    """
    user = UserFactory.build(**user_kwargs)
    async with database.session() as session:
        session.add(user)
        await session.commit()
        await session.refresh(user)
    return user


async def create_project(database: Database, owner: User, **project_kwargs) -> Project:
    """Create a project together with its owner membership.

    Args:
        database: Database to write to
        owner: User that owns the project
        **project_kwargs: Additional args passed to ProjectFactory

    Returns:
        The persisted project
    """
    project = ProjectFactory.build(owner_id=owner.id, **project_kwargs)
    async with database.session() as session:
        session.add(project)
        await session.flush()
        session.add(ProjectMemberFactory.owner(project_id=project.id, user_id=owner.id))
        await session.commit()
        await session.refresh(project)
    return project


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header carrying a fresh access token for ``user``."""
    token = create_access_token(subject=user.id, access_level=user.access_level)
    return {"Authorization": f"Bearer {token}"}
