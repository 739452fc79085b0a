"""Authentication endpoints."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.teamhub.api.dependencies import AuthServiceDep, Verifier
from src.teamhub.core.exceptions import AuthenticationError
from src.teamhub.core.rate_limit import (
    LOGIN_RATE_LIMIT,
    PASSWORD_RESET_RATE_LIMIT,
    REGISTER_RATE_LIMIT,
    limiter,
)
from src.teamhub.schemas import (
    Envelope,
    ForgotPasswordRequest,
    GoogleLoginRequest,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegistrationResult,
    UserRead,
    ok,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=Envelope[RegistrationResult],
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Account created",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "user": {
                                "id": "550e8400-e29b-41d4-a716-446655440000",
                                "email": "kim@example.com",
                                "name": "김민수",
                                "phone": "010-1234-5678",
                                "position": "연구원",
                                "avatar_url": None,
                                "access_level": 2,
                                "level_label": "일반회원",
                                "is_active": True,
                                "last_seen_at": None,
                                "created_at": "2024-01-15T10:30:00",
                            },
                            "password_strength": "strong",
                        },
                        "message": "Registration complete",
                    }
                }
            },
        },
        400: {"description": "Invalid input or email already registered"},
        429: {"description": "Too many attempts"},
    },
)
@limiter.limit(REGISTER_RATE_LIMIT)
async def register(
    request: Request, data: RegisterRequest, service: AuthServiceDep
) -> Envelope[RegistrationResult]:
    """Create a member account (access level 2)."""
    user, strength = await service.register(data)
    return ok(
        RegistrationResult(user=UserRead.from_user(user), password_strength=strength),
        "Registration complete",
    )


@router.post(
    "/login",
    response_model=Envelope[LoginResponse],
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "refresh_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "token_type": "bearer",
                            "access_level": 2,
                        },
                        "message": None,
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many attempts"},
    },
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request, login_data: LoginRequest, service: AuthServiceDep
) -> Envelope[LoginResponse]:
    """Authenticate with email and password and return tokens."""
    result = await service.authenticate(login_data.email, login_data.password)
    if result is None:
        raise AuthenticationError("Invalid email or password")
    return ok(result)


@router.post(
    "/google",
    response_model=Envelope[LoginResponse],
    responses={
        401: {"description": "Invalid Google ID token or deactivated account"},
        503: {"description": "Google sign-in not configured"},
    },
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def google_login(
    request: Request,
    data: GoogleLoginRequest,
    verify: Verifier,
    service: AuthServiceDep,
) -> Envelope[LoginResponse]:
    """Sign in with a Google ID token. First-time users get a member account."""
    identity = await verify(data.id_token)
    return ok(await service.authenticate_federated(identity))


@router.post(
    "/refresh",
    response_model=Envelope[RefreshResponse],
    responses={401: {"description": "Invalid, expired or revoked refresh token"}},
)
async def refresh(data: RefreshRequest, service: AuthServiceDep) -> Envelope[RefreshResponse]:
    """Exchange a refresh token for a new token pair. The old refresh token is revoked."""
    result = await service.refresh_access_token(data.refresh_token)
    if result is None:
        raise AuthenticationError("Invalid or expired refresh token")
    return ok(result)


@router.post("/logout", response_model=Envelope[None])
async def logout(data: LogoutRequest, service: AuthServiceDep) -> Envelope[None]:
    """Revoke a refresh token. Succeeds even if the token was already unusable."""
    await service.revoke_refresh_token(data.refresh_token)
    return ok(message="Logged out")


@router.post(
    "/forgot-password",
    response_model=Envelope[None],
    responses={
        403: {"description": "Account cannot be reset by email"},
        404: {"description": "No active account with this email"},
        429: {"description": "Too many attempts"},
    },
)
@limiter.limit(PASSWORD_RESET_RATE_LIMIT)
async def forgot_password(
    request: Request, data: ForgotPasswordRequest, service: AuthServiceDep
) -> Envelope[None]:
    """Issue a temporary password and send it by email."""
    sent = await service.reset_password(data.email)
    if not sent:
        return ok(message="Temporary password issued, but the email could not be sent")
    return ok(message="A temporary password has been sent to your email")
