"""Authentication and authorization dependencies.

Every protected route resolves ``CurrentUser`` and, where a capability gates
the route, ``RequireCapability``. Ownership rules that depend on the record
being touched are checked by the services.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.teamhub.api.dependencies.repositories import UserRepo
from src.teamhub.core.logging import bind_user_context
from src.teamhub.core.permissions import CAPABILITY_NAMES, get_capabilities
from src.teamhub.core.security import decode_token
from src.teamhub.models import User
from src.teamhub.services.auth_service import TokenType


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    user_repo: UserRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Validate the bearer access token and load its user.

    The level stored on the user row wins over the ``level`` claim, so a level
    change takes effect on the next request.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise _unauthorized("Invalid or expired token")
    if payload.get("type") != TokenType.ACCESS:
        raise _unauthorized("Invalid token type")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError as e:
        raise _unauthorized("Invalid token payload") from e

    user = await user_repo.get_by_id(user_id)
    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    bind_user_context(user.id, user.access_level, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


class RequireCapability:
    """Dependency that admits the current user only if their level grants every capability.

    Usage:
        @router.get("/", dependencies=[Depends(RequireCapability("can_view_users"))])
    """

    def __init__(self, *capabilities: str):
        unknown = set(capabilities) - CAPABILITY_NAMES
        if unknown:
            raise ValueError(f"Unknown capabilities: {sorted(unknown)}")
        self.capabilities = capabilities

    async def __call__(self, user: CurrentUser) -> User:
        granted = get_capabilities(user.access_level)
        missing = [c for c in self.capabilities if not granted.allows(c)]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing permission: {', '.join(missing)}",
            )
        return user


UserManager = Annotated[User, Depends(RequireCapability("can_manage_users"))]
