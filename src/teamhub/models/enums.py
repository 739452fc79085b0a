"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"


class ProjectRole(str, Enum):
    """Role of a user within one project."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    BLOCKED = "blocked"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class MilestoneStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class SchedulePriority(str, Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class UserManagementAction(str, Enum):
    """Administrative actions recorded in the user management log."""

    LEVEL_CHANGE = "level_change"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
