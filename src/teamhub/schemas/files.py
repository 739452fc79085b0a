from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.teamhub.models import ProjectFile
from src.teamhub.models.files import is_local_id


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Name cannot be empty or whitespace only")
    return v


class FolderCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    parent_id: str | None = None
    project_id: UUID | None = None

    _validate_name = field_validator("name")(_clean_name)


class FileRename(BaseModel):
    name: str = Field(min_length=1, max_length=255)

    _validate_name = field_validator("name")(_clean_name)


class FileMove(BaseModel):
    parent_id: str | None = Field(default=None, description="Target folder; null for the root")


class FileNodeRead(BaseModel):
    id: str = Field(description="Storage provider id, or a local_ id if never stored remotely")
    name: str
    mime_type: str
    modified_time: datetime
    size: int
    is_folder: bool
    parent_id: str | None
    path: str
    project_id: UUID | None
    is_local: bool

    @classmethod
    def from_node(cls, node: ProjectFile) -> "FileNodeRead":
        return cls(
            id=node.node_id,
            name=node.name,
            mime_type=node.mime_type,
            modified_time=node.updated_at,
            size=node.size,
            is_folder=node.is_folder,
            parent_id=node.parent_id,
            path=node.path,
            project_id=node.project_id,
            is_local=is_local_id(node.node_id),
        )
