"""Model exports.

Import from here: `from src.teamhub.models import User, Project`
"""

from src.teamhub.models.board import Comment, Post
from src.teamhub.models.enums import (
    MilestoneStatus,
    ProjectRole,
    ProjectStatus,
    SchedulePriority,
    TaskPriority,
    TaskStatus,
    UserManagementAction,
)
from src.teamhub.models.files import FOLDER_MIME_TYPE, ProjectFile
from src.teamhub.models.project import (
    Message,
    Milestone,
    Project,
    ProjectMember,
    Schedule,
    Task,
)
from src.teamhub.models.user import RefreshToken, User, UserManagementLog

__all__ = [
    # Enums
    "MilestoneStatus",
    "ProjectRole",
    "ProjectStatus",
    "SchedulePriority",
    "TaskPriority",
    "TaskStatus",
    "UserManagementAction",
    # Users
    "RefreshToken",
    "User",
    "UserManagementLog",
    # Projects
    "Message",
    "Milestone",
    "Project",
    "ProjectMember",
    "Schedule",
    "Task",
    # Files
    "FOLDER_MIME_TYPE",
    "ProjectFile",
    # Board
    "Comment",
    "Post",
]
