"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.teamhub.api.dependencies.db import DBSession
from src.teamhub.api.dependencies.repositories import (
    CommentRepo,
    FileRepo,
    LogRepo,
    MemberRepo,
    MessageRepo,
    MilestoneRepo,
    PostRepo,
    ProjectRepo,
    ScheduleRepo,
    TaskRepo,
    TokenRepo,
    UserRepo,
)
from src.teamhub.api.dependencies.resources import AppSettings, Documents, Storage
from src.teamhub.services import (
    AdminService,
    AuthService,
    BoardService,
    FileService,
    MilestoneService,
    PersonalScheduleService,
    ProjectAccess,
    ProjectService,
    ScheduleService,
    TaskService,
    UserService,
)


def get_auth_service(user_repo: UserRepo, token_repo: TokenRepo, session: DBSession) -> AuthService:
    return AuthService(user_repo, token_repo, session)


def get_user_service(
    user_repo: UserRepo,
    token_repo: TokenRepo,
    session: DBSession,
    settings: AppSettings,
) -> UserService:
    return UserService(
        user_repo,
        token_repo,
        session,
        online_window_minutes=settings.online_window_minutes,
        away_window_minutes=settings.away_window_minutes,
    )


def get_admin_service(user_repo: UserRepo, log_repo: LogRepo, session: DBSession) -> AdminService:
    return AdminService(user_repo, log_repo, session)


def get_project_access(project_repo: ProjectRepo, member_repo: MemberRepo) -> ProjectAccess:
    return ProjectAccess(project_repo, member_repo)


Access = Annotated[ProjectAccess, Depends(get_project_access)]


def get_project_service(
    project_repo: ProjectRepo,
    member_repo: MemberRepo,
    message_repo: MessageRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, member_repo, message_repo, user_repo, session)


def get_task_service(
    task_repo: TaskRepo, user_repo: UserRepo, access: Access, session: DBSession
) -> TaskService:
    return TaskService(task_repo, user_repo, access, session)


def get_milestone_service(
    milestone_repo: MilestoneRepo, access: Access, session: DBSession
) -> MilestoneService:
    return MilestoneService(milestone_repo, access, session)


def get_schedule_service(
    schedule_repo: ScheduleRepo, access: Access, session: DBSession
) -> ScheduleService:
    return ScheduleService(schedule_repo, access, session)


def get_personal_schedule_service(documents: Documents) -> PersonalScheduleService:
    return PersonalScheduleService(documents)


def get_file_service(
    file_repo: FileRepo,
    session: DBSession,
    storage: Storage,
    settings: AppSettings,
    access: Access,
) -> FileService:
    return FileService(file_repo, session, storage, settings.max_upload_bytes, access)


def get_board_service(
    post_repo: PostRepo,
    comment_repo: CommentRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> BoardService:
    return BoardService(post_repo, comment_repo, user_repo, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
MilestoneServiceDep = Annotated[MilestoneService, Depends(get_milestone_service)]
ScheduleServiceDep = Annotated[ScheduleService, Depends(get_schedule_service)]
PersonalScheduleServiceDep = Annotated[
    PersonalScheduleService, Depends(get_personal_schedule_service)
]
FileServiceDep = Annotated[FileService, Depends(get_file_service)]
BoardServiceDep = Annotated[BoardService, Depends(get_board_service)]
