"""Repository layer - data access abstraction."""

from src.teamhub.repositories.base import BaseRepository
from src.teamhub.repositories.board import CommentRepository, PostRepository
from src.teamhub.repositories.files import ProjectFileRepository
from src.teamhub.repositories.project import (
    MessageRepository,
    MilestoneRepository,
    ProjectMemberRepository,
    ProjectRepository,
    ScheduleRepository,
    TaskRepository,
)
from src.teamhub.repositories.user import (
    RefreshTokenRepository,
    UserManagementLogRepository,
    UserRepository,
)

__all__ = [
    "BaseRepository",
    # Users
    "RefreshTokenRepository",
    "UserManagementLogRepository",
    "UserRepository",
    # Projects
    "MessageRepository",
    "MilestoneRepository",
    "ProjectMemberRepository",
    "ProjectRepository",
    "ScheduleRepository",
    "TaskRepository",
    # Files
    "ProjectFileRepository",
    # Board
    "CommentRepository",
    "PostRepository",
]
