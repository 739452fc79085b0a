"""Virtual file hierarchy backed by an object-storage provider.

Records live in the relational store; bytes live with the provider. Provider
failures never fail a create/rename/delete/move: creates fall back to a
``local_`` node id, the rest are logged and the local change goes through.
Local-only nodes are never reconciled with the provider afterwards.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.exceptions import (
    DomainValidationError,
    NotFoundError,
    ServiceUnavailableError,
)
from src.teamhub.core.logging import get_logger
from src.teamhub.integrations.storage import ObjectStorage, StorageError
from src.teamhub.models import FOLDER_MIME_TYPE, ProjectFile, User
from src.teamhub.models.base import utc_now
from src.teamhub.repositories import ProjectFileRepository
from src.teamhub.services import file_tree
from src.teamhub.services.project_access import ProjectAccess

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
UNTITLED = "untitled"
MAX_NAME_LENGTH = 255


def clean_upload_name(filename: str | None) -> str:
    """Client filenames: trimmed, never blank, at most 255 characters with the extension kept."""
    name = (filename or "").strip() or UNTITLED
    if len(name) <= MAX_NAME_LENGTH:
        return name
    stem, dot, extension = name.rpartition(".")
    if dot and stem and len(extension) < 16:
        return stem[: MAX_NAME_LENGTH - len(extension) - 1] + "." + extension
    return name[:MAX_NAME_LENGTH]


class FileService:
    def __init__(
        self,
        file_repo: ProjectFileRepository,
        session: AsyncSession,
        storage: ObjectStorage,
        max_upload_bytes: int,
        access: ProjectAccess,
    ):
        self.file_repo = file_repo
        self.access = access
        self.session = session
        self.storage = storage
        self.max_upload_bytes = max_upload_bytes

    async def _check_project(self, project_id: UUID | None, user: User) -> None:
        if project_id is not None:
            await self.access.require_contributor(project_id, user)

    async def get_node(self, reference: str) -> ProjectFile:
        node = await self.file_repo.get_by_reference(reference)
        if node is None:
            raise NotFoundError("File or folder not found")
        return node

    async def _resolve_parent(self, parent_id: str | None) -> ProjectFile | None:
        if parent_id is None:
            return None
        parent = await self.file_repo.get_by_reference(parent_id)
        if parent is None:
            raise NotFoundError("Parent folder not found")
        if not parent.is_folder:
            raise DomainValidationError("Parent must be a folder")
        return parent

    async def list_children(self, parent_id: str | None) -> list[ProjectFile]:
        """Direct children of a folder (or of the root). Unknown parents list as empty."""
        if parent_id is None:
            parent_path = file_tree.ROOT_PATH
        else:
            parent = await self.file_repo.get_by_reference(parent_id)
            if parent is None:
                return []
            parent_path = parent.path
        return await self.file_repo.list_children(parent_path, file_tree.child_depth(parent_path))

    async def create_folder(
        self,
        name: str,
        parent_id: str | None,
        user: User,
        project_id: UUID | None = None,
    ) -> ProjectFile:
        await self._check_project(project_id, user)
        parent = await self._resolve_parent(parent_id)

        if parent is not None and file_tree.is_local_id(parent.node_id):
            node_id = file_tree.new_local_id()
            logger.warning(
                "Parent folder is local-only, folder not created remotely",
                parent_id=parent.node_id,
                node_id=node_id,
            )
        else:
            try:
                remote = await self.storage.create_folder(
                    name, parent.node_id if parent else None
                )
                node_id = remote.id
            except StorageError as e:
                node_id = file_tree.new_local_id()
                logger.warning(
                    "Storage provider failed, folder created with local id",
                    error=str(e),
                    node_id=node_id,
                )

        return await self._insert_node(
            node_id=node_id,
            name=name,
            mime_type=FOLDER_MIME_TYPE,
            is_folder=True,
            size=0,
            parent=parent,
            user=user,
            project_id=project_id,
        )

    async def upload(
        self,
        data: bytes,
        name: str | None,
        content_type: str | None,
        parent_id: str | None,
        user: User,
        project_id: UUID | None = None,
    ) -> ProjectFile:
        if len(data) > self.max_upload_bytes:
            raise DomainValidationError(
                f"File exceeds the {self.max_upload_bytes // (1024 * 1024)}MB upload limit"
            )
        if not data:
            raise DomainValidationError("File is empty")

        content_type = content_type or DEFAULT_CONTENT_TYPE
        if content_type.split(";", 1)[0].strip().lower() == FOLDER_MIME_TYPE:
            raise DomainValidationError("Folders are created, not uploaded")
        name = clean_upload_name(name)

        await self._check_project(project_id, user)
        parent = await self._resolve_parent(parent_id)

        if parent is not None and file_tree.is_local_id(parent.node_id):
            node_id = file_tree.new_local_id()
            logger.warning(
                "Parent folder is local-only, file not uploaded",
                parent_id=parent.node_id,
                node_id=node_id,
            )
        else:
            try:
                remote = await self.storage.upload(
                    data, name, content_type, parent.node_id if parent else None
                )
                node_id = remote.id
            except StorageError as e:
                node_id = file_tree.new_local_id()
                logger.warning(
                    "Storage provider failed, file recorded with local id",
                    error=str(e),
                    node_id=node_id,
                    size=len(data),
                )

        return await self._insert_node(
            node_id=node_id,
            name=name,
            mime_type=content_type,
            is_folder=False,
            size=len(data),
            parent=parent,
            user=user,
            project_id=project_id,
        )

    async def _insert_node(
        self,
        *,
        node_id: str,
        name: str,
        mime_type: str,
        is_folder: bool,
        size: int,
        parent: ProjectFile | None,
        user: User,
        project_id: UUID | None,
    ) -> ProjectFile:
        parent_path = parent.path if parent else file_tree.ROOT_PATH
        path = file_tree.child_path(parent_path, is_folder, node_id)
        if project_id is None and parent is not None:
            project_id = parent.project_id
        node = ProjectFile(
            node_id=node_id,
            name=name,
            mime_type=mime_type,
            size=size,
            is_folder=is_folder,
            parent_id=parent.node_id if parent else None,
            path=path,
            depth=file_tree.segment_count(path),
            project_id=project_id,
            uploaded_by=user.id,
        )
        self.file_repo.add(node)
        try:
            await self.session.commit()
            await self.session.refresh(node)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "File node created",
            node_id=node_id,
            is_folder=is_folder,
            local_only=file_tree.is_local_id(node_id),
        )
        return node

    async def rename(self, reference: str, name: str) -> ProjectFile:
        node = await self.get_node(reference)

        if not file_tree.is_local_id(node.node_id):
            try:
                await self.storage.rename(node.node_id, name)
            except StorageError as e:
                logger.warning("Remote rename failed", node_id=node.node_id, error=str(e))

        # Paths are built from ids, so a rename never touches descendants
        node.name = name
        node.updated_at = utc_now()
        try:
            await self.session.commit()
            await self.session.refresh(node)
        except Exception:
            await self.session.rollback()
            raise
        return node

    async def delete(self, reference: str) -> int:
        """Delete a node and its local subtree. Returns the number of records removed."""
        node = await self.get_node(reference)

        if not file_tree.is_local_id(node.node_id):
            try:
                await self.storage.delete(node.node_id)
            except StorageError as e:
                logger.warning("Remote delete failed", node_id=node.node_id, error=str(e))

        try:
            removed = await self.file_repo.delete_subtree(node.path)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("File node deleted", node_id=node.node_id, records_removed=removed)
        return removed

    async def move(self, reference: str, new_parent_id: str | None) -> ProjectFile:
        """Re-parent a node, rewriting the path of every descendant in one transaction."""
        node = await self.get_node(reference)
        new_parent = await self._resolve_parent(new_parent_id)
        new_parent_node_id = new_parent.node_id if new_parent else None
        new_parent_path = new_parent.path if new_parent else file_tree.ROOT_PATH

        if file_tree.is_within(new_parent_path, node.path):
            raise DomainValidationError("A folder cannot be moved into itself")
        if new_parent_node_id == node.parent_id:
            return node

        old_path = node.path
        old_parent_id = node.parent_id
        new_path = file_tree.child_path(new_parent_path, node.is_folder, node.node_id)

        involved = [i for i in (node.node_id, new_parent_node_id, old_parent_id) if i]
        if not any(file_tree.is_local_id(i) for i in involved):
            try:
                await self.storage.move(node.node_id, new_parent_node_id, old_parent_id)
            except StorageError as e:
                logger.warning("Remote move failed", node_id=node.node_id, error=str(e))

        try:
            descendants = await self.file_repo.list_descendants(old_path)
            now = utc_now()
            for descendant in descendants:
                descendant.path = file_tree.rebase(descendant.path, old_path, new_path)
                descendant.depth = file_tree.segment_count(descendant.path)
                descendant.updated_at = now
            node.path = new_path
            node.depth = file_tree.segment_count(new_path)
            node.parent_id = new_parent_node_id
            node.updated_at = now
            await self.session.commit()
            await self.session.refresh(node)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "File node moved",
            node_id=node.node_id,
            old_path=old_path,
            new_path=new_path,
            descendants=len(descendants),
        )
        return node

    async def download(self, reference: str) -> tuple[ProjectFile, bytes]:
        node = await self.get_node(reference)
        if node.is_folder:
            raise DomainValidationError("Folders cannot be downloaded")
        if file_tree.is_local_id(node.node_id):
            raise NotFoundError("File content was never stored and cannot be downloaded")

        try:
            data = await self.storage.download(node.node_id)
        except StorageError as e:
            logger.error("Remote download failed", node_id=node.node_id, error=str(e))
            raise ServiceUnavailableError("File storage is unavailable") from e
        return node, data
