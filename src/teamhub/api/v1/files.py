"""File manager endpoints over the virtual file hierarchy."""

from typing import Annotated
from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from src.teamhub.api.dependencies import AppSettings, FileServiceDep, RequireCapability
from src.teamhub.models import User
from src.teamhub.schemas import (
    Envelope,
    FileMove,
    FileNodeRead,
    FileRename,
    FolderCreate,
    ok,
)

router = APIRouter(prefix="/files", tags=["files"])

FileViewer = Annotated[User, Depends(RequireCapability("can_view_file"))]
FolderCreator = Annotated[User, Depends(RequireCapability("can_create_folder"))]
FileUploader = Annotated[User, Depends(RequireCapability("can_upload_file"))]
FileDeleter = Annotated[User, Depends(RequireCapability("can_delete_file"))]
FileDownloader = Annotated[User, Depends(RequireCapability("can_download_file"))]


def content_disposition(filename: str) -> str:
    """``attachment`` header with an ASCII fallback and an RFC 5987 UTF-8 name."""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.get(
    "",
    response_model=Envelope[list[FileNodeRead]],
    responses={
        200: {
            "description": "Direct children of a folder, newest first",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": [
                            {
                                "id": "1AbCdEfGhIjKlMnOp",
                                "name": "현장사진",
                                "mime_type": "application/vnd.google-apps.folder",
                                "modified_time": "2024-01-15T10:30:00",
                                "size": 0,
                                "is_folder": True,
                                "parent_id": None,
                                "path": "/global/folders/1AbCdEfGhIjKlMnOp",
                                "project_id": None,
                                "is_local": False,
                            }
                        ],
                        "message": None,
                    }
                }
            },
        }
    },
)
async def list_files(
    _: FileViewer,
    service: FileServiceDep,
    parent_id: str | None = None,
) -> Envelope[list[FileNodeRead]]:
    """List a folder. Without ``parent_id`` the root is listed; unknown folders list as empty."""
    nodes = await service.list_children(parent_id)
    return ok([FileNodeRead.from_node(n) for n in nodes])


@router.post(
    "",
    response_model=Envelope[FileNodeRead],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Parent is not a folder"},
        404: {"description": "Parent folder not found"},
    },
)
async def create_folder(
    data: FolderCreate, current_user: FolderCreator, service: FileServiceDep
) -> Envelope[FileNodeRead]:
    """Create a folder. If storage is unreachable the folder gets a local id."""
    node = await service.create_folder(data.name, data.parent_id, current_user, data.project_id)
    return ok(FileNodeRead.from_node(node), "Folder created")


@router.post(
    "/upload",
    response_model=Envelope[FileNodeRead],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Empty file, file over the upload limit, or parent not a folder"},
        404: {"description": "Parent folder not found"},
    },
)
async def upload_file(
    current_user: FileUploader,
    service: FileServiceDep,
    settings: AppSettings,
    file: Annotated[UploadFile, File()],
    parent_id: Annotated[str | None, Form()] = None,
    project_id: Annotated[UUID | None, Form()] = None,
) -> Envelope[FileNodeRead]:
    """Upload a file. The limit is checked before anything is sent to storage."""
    # Read one byte past the limit so oversized uploads are detected without buffering them whole
    data = await file.read(settings.max_upload_bytes + 1)
    node = await service.upload(
        data,
        file.filename,
        file.content_type,
        parent_id,
        current_user,
        project_id,
    )
    return ok(FileNodeRead.from_node(node), "File uploaded")


@router.patch(
    "/{file_id}",
    response_model=Envelope[FileNodeRead],
    responses={404: {"description": "File or folder not found"}},
)
async def rename_file(
    file_id: str,
    data: FileRename,
    _: FileUploader,
    service: FileServiceDep,
) -> Envelope[FileNodeRead]:
    node = await service.rename(file_id, data.name)
    return ok(FileNodeRead.from_node(node), "Renamed")


@router.patch(
    "/{file_id}/move",
    response_model=Envelope[FileNodeRead],
    responses={
        400: {"description": "Target is not a folder, or is inside the moved folder"},
        404: {"description": "File or target folder not found"},
    },
)
async def move_file(
    file_id: str,
    data: FileMove,
    _: FileUploader,
    service: FileServiceDep,
) -> Envelope[FileNodeRead]:
    """Move a node under another folder (or the root), carrying its subtree along."""
    node = await service.move(file_id, data.parent_id)
    return ok(FileNodeRead.from_node(node), "Moved")


@router.delete(
    "/{file_id}",
    response_model=Envelope[int],
    responses={404: {"description": "File or folder not found"}},
)
async def delete_file(
    file_id: str, _: FileDeleter, service: FileServiceDep
) -> Envelope[int]:
    """Delete a node and everything under it. Returns the number of records removed."""
    return ok(await service.delete(file_id), "Deleted")


@router.get(
    "/{file_id}/download",
    response_class=Response,
    responses={
        200: {"description": "File content", "content": {"application/octet-stream": {}}},
        400: {"description": "Folders cannot be downloaded"},
        404: {"description": "File not found or never stored"},
        503: {"description": "Storage unavailable"},
    },
)
async def download_file(
    file_id: str, _: FileDownloader, service: FileServiceDep
) -> Response:
    node, data = await service.download(file_id)
    return Response(
        content=data,
        media_type=node.mime_type,
        headers={"Content-Disposition": content_disposition(node.name)},
    )
