"""FastAPI dependency injection definitions.

Re-exports all dependencies so routes import from one place.
"""

# Auth
from src.teamhub.api.dependencies.auth import (
    CurrentUser,
    RequireCapability,
    UserManager,
    get_current_user,
)

# Database
from src.teamhub.api.dependencies.db import DBSession, get_database, get_db_session

# Application resources
from src.teamhub.api.dependencies.resources import (
    AppSettings,
    Documents,
    IdentityVerifier,
    Storage,
    Verifier,
    get_app_settings,
    get_document_store,
    get_identity_verifier,
    get_storage,
)

# Services
from src.teamhub.api.dependencies.services import (
    AdminServiceDep,
    AuthServiceDep,
    BoardServiceDep,
    FileServiceDep,
    MilestoneServiceDep,
    PersonalScheduleServiceDep,
    ProjectServiceDep,
    ScheduleServiceDep,
    TaskServiceDep,
    UserServiceDep,
)

__all__ = [
    # Database
    "DBSession",
    "get_database",
    "get_db_session",
    # Resources
    "AppSettings",
    "Documents",
    "IdentityVerifier",
    "Storage",
    "Verifier",
    "get_app_settings",
    "get_document_store",
    "get_identity_verifier",
    "get_storage",
    # Auth
    "CurrentUser",
    "RequireCapability",
    "UserManager",
    "get_current_user",
    # Services
    "AdminServiceDep",
    "AuthServiceDep",
    "BoardServiceDep",
    "FileServiceDep",
    "MilestoneServiceDep",
    "PersonalScheduleServiceDep",
    "ProjectServiceDep",
    "ScheduleServiceDep",
    "TaskServiceDep",
    "UserServiceDep",
]
