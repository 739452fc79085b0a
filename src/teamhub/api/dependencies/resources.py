"""Application-scoped resources held on ``app.state``."""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request

from src.teamhub.core.config import Settings
from src.teamhub.core.documents import DocumentStore
from src.teamhub.core.exceptions import AuthenticationError, ServiceUnavailableError
from src.teamhub.integrations.google import GoogleAuthError, GoogleIdentity, verify_id_token
from src.teamhub.integrations.storage import ObjectStorage

IdentityVerifier = Callable[[str], Awaitable[GoogleIdentity]]


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage


def get_document_store(request: Request) -> DocumentStore:
    documents: DocumentStore | None = request.app.state.documents
    if documents is None:
        raise ServiceUnavailableError("Document store is unavailable")
    return documents


def get_identity_verifier(request: Request) -> IdentityVerifier:
    """Verify Google ID tokens against the configured OAuth client."""
    settings: Settings = request.app.state.settings
    client = request.app.state.http_client

    async def verify(id_token: str) -> GoogleIdentity:
        if not settings.google_client_id:
            raise ServiceUnavailableError("Google sign-in is not configured")
        try:
            return await verify_id_token(client, id_token, settings.google_client_id)
        except GoogleAuthError as e:
            raise AuthenticationError(str(e)) from e

    return verify


AppSettings = Annotated[Settings, Depends(get_app_settings)]
Storage = Annotated[ObjectStorage, Depends(get_storage)]
Documents = Annotated[DocumentStore, Depends(get_document_store)]
Verifier = Annotated[IdentityVerifier, Depends(get_identity_verifier)]
