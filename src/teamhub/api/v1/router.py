from fastapi import APIRouter

from src.teamhub.api.v1 import (
    admin,
    auth,
    comments,
    files,
    milestones,
    personal_schedules,
    posts,
    profile,
    projects,
    schedules,
    tasks,
    users,
)

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(profile.router)
api_router.include_router(users.router)
api_router.include_router(admin.router)
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(milestones.router)
# Before the project calendar so /schedules/user is never read as a schedule id
api_router.include_router(personal_schedules.router)
api_router.include_router(schedules.router)
api_router.include_router(files.router)
api_router.include_router(posts.router)
api_router.include_router(comments.router)
