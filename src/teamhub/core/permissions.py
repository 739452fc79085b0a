"""Access levels, capability sets and ownership predicates.

The capability table is a pure lookup keyed by access level. Ownership
exceptions (authors editing their own content, project owners managing their
own project) are resolved by the predicates at the bottom of this module.
"""

from dataclasses import asdict, dataclass, fields
from enum import IntEnum
from typing import Final, Literal
from uuid import UUID


class AccessLevel(IntEnum):
    """User access tier. Lower values are more privileged."""

    SUPER_ADMIN = 0
    ADMIN = 1
    MEMBER = 2


LEVEL_LABELS: Final[dict[AccessLevel, str]] = {
    AccessLevel.SUPER_ADMIN: "최고관리자",
    AccessLevel.ADMIN: "관리자",
    AccessLevel.MEMBER: "일반회원",
}

ResourceAction = Literal["view", "create", "edit", "delete"]


@dataclass(frozen=True)
class Capabilities:
    # Projects
    can_create_project: bool = False
    can_edit_project: bool = False
    can_delete_project: bool = False
    can_view_project: bool = False

    # Schedules
    can_manage_team_schedule: bool = False
    can_manage_personal_schedule: bool = False
    can_view_schedule: bool = False

    # Files
    can_upload_file: bool = False
    can_delete_file: bool = False
    can_create_folder: bool = False
    can_download_file: bool = False
    can_view_file: bool = False

    # Tasks
    can_create_task: bool = False
    can_edit_task: bool = False
    can_delete_task: bool = False
    can_view_task: bool = False

    # Process management (disabled for every level)
    can_manage_process: bool = False
    can_view_process: bool = False

    # Users
    can_manage_users: bool = False
    can_view_users: bool = False

    # Board
    can_create_post: bool = False
    can_edit_post: bool = False
    can_delete_post: bool = False
    can_view_post: bool = False

    def allows(self, capability: str) -> bool:
        return bool(getattr(self, capability))

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


CAPABILITY_NAMES: Final[frozenset[str]] = frozenset(f.name for f in fields(Capabilities))

_ALL: Final[dict[str, bool]] = {
    name: name not in ("can_manage_process", "can_view_process") for name in CAPABILITY_NAMES
}

_CAPABILITIES: Final[dict[AccessLevel, Capabilities]] = {
    AccessLevel.SUPER_ADMIN: Capabilities(**_ALL),
    AccessLevel.ADMIN: Capabilities(
        **{**_ALL, "can_manage_users": False, "can_delete_post": False}
    ),
    AccessLevel.MEMBER: Capabilities(
        can_view_project=True,
        can_manage_personal_schedule=True,
        can_view_schedule=True,
        can_upload_file=True,
        can_delete_file=True,
        can_create_folder=True,
        can_download_file=True,
        can_view_file=True,
        can_create_task=True,
        can_edit_task=True,
        can_delete_task=True,
        can_view_task=True,
        can_view_users=True,
        can_create_post=True,
        can_edit_post=True,
        can_view_post=True,
    ),
}

_NO_CAPABILITIES: Final[Capabilities] = Capabilities()


def get_capabilities(level: int | None) -> Capabilities:
    """Return the capability set of an access level.

    ``None`` (no session) and unknown levels get no capabilities at all.
    """
    if level is None:
        return _NO_CAPABILITIES
    try:
        return _CAPABILITIES[AccessLevel(level)]
    except ValueError:
        return _NO_CAPABILITIES


def has_capability(level: int | None, capability: str) -> bool:
    if capability not in CAPABILITY_NAMES:
        raise ValueError(f"Unknown capability: {capability}")
    return get_capabilities(level).allows(capability)


def is_admin(level: int) -> bool:
    """Super-admins and admins."""
    return level <= AccessLevel.ADMIN


def is_super_admin(level: int) -> bool:
    return level == AccessLevel.SUPER_ADMIN


def level_label(level: int) -> str:
    try:
        return LEVEL_LABELS[AccessLevel(level)]
    except ValueError:
        return "알 수 없음"


def has_project_permission(
    level: int,
    action: ResourceAction,
    owner_id: UUID | None,
    user_id: UUID,
) -> bool:
    """Admins may do anything, owners may view/edit/delete, everyone else may view."""
    if is_admin(level):
        return True
    if owner_id is not None and owner_id == user_id:
        return action in ("view", "edit", "delete")
    return action == "view"


def has_task_permission(
    level: int,
    action: ResourceAction,
    assignee_id: UUID | None,
    user_id: UUID,
) -> bool:
    if is_admin(level):
        return True
    if assignee_id is not None and assignee_id == user_id:
        return action in ("view", "edit", "delete")
    if action == "create":
        return get_capabilities(level).can_create_task
    return action == "view"


def can_modify_user(
    actor_id: UUID,
    actor_level: int,
    target_id: UUID,
    target_level: int,
) -> bool:
    """Whether ``actor`` may mutate the ``target`` user record.

    A super-admin record is immutable by anyone but itself. Other records may
    be mutated by their owner or by a user-manager.
    """
    if actor_id == target_id:
        return True
    if is_super_admin(target_level):
        return False
    return get_capabilities(actor_level).can_manage_users


def can_edit_content(level: int, author_id: UUID, user_id: UUID) -> bool:
    return author_id == user_id or is_admin(level)


def can_delete_content(level: int, author_id: UUID, user_id: UUID) -> bool:
    return author_id == user_id or get_capabilities(level).can_delete_post
