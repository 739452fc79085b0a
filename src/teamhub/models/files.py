"""Virtual file hierarchy node."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.teamhub.models.base import utc_now

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
LOCAL_ID_PREFIX = "local_"


def is_local_id(node_id: str) -> bool:
    """Whether a node id was synthesized locally instead of issued by the provider."""
    return node_id.startswith(LOCAL_ID_PREFIX)


class ProjectFile(SQLModel, table=True):
    """A file or folder in the shared file manager.

    ``node_id`` is what clients address: the storage provider's object id, or a
    ``local_`` id when the provider could not be reached. ``parent_id`` holds
    the parent's ``node_id``; ``path``/``depth`` materialize the ancestry chain
    for subtree queries.
    """

    __tablename__ = "project_files"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    node_id: str = Field(max_length=200, unique=True, index=True)
    name: str = Field(max_length=255)
    mime_type: str = Field(max_length=255)
    size: int = Field(default=0)
    is_folder: bool = Field(default=False)
    parent_id: str | None = Field(default=None, max_length=200, index=True)
    path: str = Field(max_length=2000, index=True)
    depth: int = Field(index=True)
    project_id: UUID | None = Field(default=None, foreign_key="projects.id", index=True)
    uploaded_by: UUID = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
