from src.teamhub.services.admin_service import AdminService
from src.teamhub.services.auth_service import AuthService
from src.teamhub.services.board_service import BoardService
from src.teamhub.services.file_service import FileService
from src.teamhub.services.milestone_service import MilestoneService
from src.teamhub.services.personal_schedule_service import PersonalScheduleService
from src.teamhub.services.project_access import ProjectAccess
from src.teamhub.services.project_service import ProjectService
from src.teamhub.services.schedule_service import ScheduleService
from src.teamhub.services.task_service import TaskService
from src.teamhub.services.user_service import UserService

__all__ = [
    "AdminService",
    "AuthService",
    "BoardService",
    "FileService",
    "MilestoneService",
    "PersonalScheduleService",
    "ProjectAccess",
    "ProjectService",
    "ScheduleService",
    "TaskService",
    "UserService",
]
