"""Google integrations - Drive storage and OAuth."""

from src.teamhub.integrations.google.drive import GoogleDriveStorage, build_storage
from src.teamhub.integrations.google.oauth import (
    GoogleAuthError,
    GoogleIdentity,
    GoogleTokenProvider,
    verify_id_token,
)

__all__ = [
    "GoogleAuthError",
    "GoogleDriveStorage",
    "GoogleIdentity",
    "GoogleTokenProvider",
    "build_storage",
    "verify_id_token",
]
