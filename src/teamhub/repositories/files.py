"""Repository for virtual file hierarchy nodes."""

from uuid import UUID

from sqlalchemy import delete, or_
from sqlmodel import select

from src.teamhub.models import ProjectFile
from src.teamhub.repositories.base import BaseRepository


class ProjectFileRepository(BaseRepository[ProjectFile]):
    model = ProjectFile

    async def get_by_node_id(self, node_id: str) -> ProjectFile | None:
        result = await self.session.execute(
            select(ProjectFile).where(ProjectFile.node_id == node_id)
        )
        return result.scalar_one_or_none()

    async def get_by_reference(self, reference: str) -> ProjectFile | None:
        """Look a node up by its node id, or by its record UUID."""
        node = await self.get_by_node_id(reference)
        if node is not None:
            return node
        try:
            record_id = UUID(reference)
        except ValueError:
            return None
        return await self.get_by_id(record_id)

    async def list_children(self, parent_path: str, child_depth: int) -> list[ProjectFile]:
        """Nodes directly below ``parent_path``, newest first."""
        result = await self.session.execute(
            select(ProjectFile)
            .where(
                ProjectFile.path.startswith(f"{parent_path}/", autoescape=True),  # type: ignore[attr-defined]
                ProjectFile.depth == child_depth,
            )
            .order_by(ProjectFile.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_descendants(self, path: str) -> list[ProjectFile]:
        """Every node strictly below ``path``, shallowest first."""
        result = await self.session.execute(
            select(ProjectFile)
            .where(ProjectFile.path.startswith(f"{path}/", autoescape=True))  # type: ignore[attr-defined]
            .order_by(ProjectFile.depth.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def delete_subtree(self, path: str) -> int:
        """Delete the node at ``path`` and all of its descendants. Returns the row count."""
        result = await self.session.execute(
            delete(ProjectFile).where(
                or_(
                    ProjectFile.path == path,  # type: ignore[arg-type]
                    ProjectFile.path.startswith(f"{path}/", autoescape=True),  # type: ignore[attr-defined]
                )
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
