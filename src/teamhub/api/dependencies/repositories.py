"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.teamhub.api.dependencies.db import DBSession
from src.teamhub.repositories import (
    CommentRepository,
    MessageRepository,
    MilestoneRepository,
    PostRepository,
    ProjectFileRepository,
    ProjectMemberRepository,
    ProjectRepository,
    RefreshTokenRepository,
    ScheduleRepository,
    TaskRepository,
    UserManagementLogRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_token_repository(session: DBSession) -> RefreshTokenRepository:
    return RefreshTokenRepository(session)


def get_log_repository(session: DBSession) -> UserManagementLogRepository:
    return UserManagementLogRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_member_repository(session: DBSession) -> ProjectMemberRepository:
    return ProjectMemberRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_milestone_repository(session: DBSession) -> MilestoneRepository:
    return MilestoneRepository(session)


def get_schedule_repository(session: DBSession) -> ScheduleRepository:
    return ScheduleRepository(session)


def get_message_repository(session: DBSession) -> MessageRepository:
    return MessageRepository(session)


def get_file_repository(session: DBSession) -> ProjectFileRepository:
    return ProjectFileRepository(session)


def get_post_repository(session: DBSession) -> PostRepository:
    return PostRepository(session)


def get_comment_repository(session: DBSession) -> CommentRepository:
    return CommentRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
TokenRepo = Annotated[RefreshTokenRepository, Depends(get_token_repository)]
LogRepo = Annotated[UserManagementLogRepository, Depends(get_log_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
MemberRepo = Annotated[ProjectMemberRepository, Depends(get_member_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
MilestoneRepo = Annotated[MilestoneRepository, Depends(get_milestone_repository)]
ScheduleRepo = Annotated[ScheduleRepository, Depends(get_schedule_repository)]
MessageRepo = Annotated[MessageRepository, Depends(get_message_repository)]
FileRepo = Annotated[ProjectFileRepository, Depends(get_file_repository)]
PostRepo = Annotated[PostRepository, Depends(get_post_repository)]
CommentRepo = Annotated[CommentRepository, Depends(get_comment_repository)]
