from src.teamhub.schemas.admin import (
    LevelChangeRequest,
    ToggleActiveRequest,
    UserManagementLogRead,
)
from src.teamhub.schemas.auth import (
    ForgotPasswordRequest,
    GoogleLoginRequest,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
)
from src.teamhub.schemas.board import (
    CommentCreate,
    CommentRead,
    CommentUpdate,
    PostCreate,
    PostDetail,
    PostRead,
    PostType,
    PostUpdate,
)
from src.teamhub.schemas.envelope import Envelope, ok
from src.teamhub.schemas.files import FileMove, FileNodeRead, FileRename, FolderCreate
from src.teamhub.schemas.pagination import NumberedPage, PageInfo, PaginatedResponse
from src.teamhub.schemas.project import (
    MemberAdd,
    MemberRead,
    MessageCreate,
    MessageRead,
    ProjectCounts,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from src.teamhub.schemas.user import (
    PasswordChangeRequest,
    PermissionsRead,
    PresenceList,
    PresenceRead,
    ProfileUpdate,
    RegistrationResult,
    UserRead,
    UserSummary,
)
from src.teamhub.schemas.work import (
    MilestoneCreate,
    MilestoneRead,
    MilestoneUpdate,
    PersonalScheduleCreate,
    PersonalScheduleRead,
    PersonalScheduleUpdate,
    ScheduleCreate,
    ScheduleRead,
    ScheduleUpdate,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)

__all__ = [
    # Admin
    "LevelChangeRequest",
    "ToggleActiveRequest",
    "UserManagementLogRead",
    # Auth
    "ForgotPasswordRequest",
    "GoogleLoginRequest",
    "LoginRequest",
    "LoginResponse",
    "LogoutRequest",
    "RefreshRequest",
    "RefreshResponse",
    "RegisterRequest",
    # Board
    "CommentCreate",
    "CommentRead",
    "CommentUpdate",
    "PostCreate",
    "PostDetail",
    "PostRead",
    "PostType",
    "PostUpdate",
    # Envelope and pagination
    "Envelope",
    "NumberedPage",
    "PageInfo",
    "PaginatedResponse",
    "ok",
    # Files
    "FileMove",
    "FileNodeRead",
    "FileRename",
    "FolderCreate",
    # Projects
    "MemberAdd",
    "MemberRead",
    "MessageCreate",
    "MessageRead",
    "ProjectCounts",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    # User
    "PasswordChangeRequest",
    "PermissionsRead",
    "PresenceList",
    "PresenceRead",
    "ProfileUpdate",
    "RegistrationResult",
    "UserRead",
    "UserSummary",
    # Work items
    "MilestoneCreate",
    "MilestoneRead",
    "MilestoneUpdate",
    "PersonalScheduleCreate",
    "PersonalScheduleRead",
    "PersonalScheduleUpdate",
    "ScheduleCreate",
    "ScheduleRead",
    "ScheduleUpdate",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
]
