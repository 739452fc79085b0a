"""Authentication service - login, federated login, token refresh, registration."""

import asyncio
import hmac
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.teamhub.core.exceptions import (
    AuthenticationError,
    DomainValidationError,
    NotFoundError,
    PermissionDeniedError,
)
from src.teamhub.core.logging import get_logger
from src.teamhub.core.notifications import send_temporary_password_email
from src.teamhub.core.permissions import AccessLevel, is_super_admin
from src.teamhub.core.security import (
    DUMMY_PASSWORD_HASH,
    PasswordStrength,
    create_access_token,
    create_refresh_token,
    decode_token,
    generate_temporary_password,
    hash_password,
    hash_token,
    password_strength,
    verify_password,
)
from src.teamhub.core.security.validators import NAME_MAX_LENGTH, NAME_MIN_LENGTH
from src.teamhub.integrations.google import GoogleIdentity
from src.teamhub.models import RefreshToken, User
from src.teamhub.models.base import utc_now
from src.teamhub.repositories import RefreshTokenRepository, UserRepository
from src.teamhub.schemas.auth import LoginResponse, RefreshResponse, RegisterRequest

logger = get_logger(__name__)


class TokenType:
    """Token type constants."""

    ACCESS = "access"
    REFRESH = "refresh"


class AuthService:
    def __init__(
        self,
        user_repo: UserRepository,
        token_repo: RefreshTokenRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.session = session

    async def _issue_tokens(self, user: User) -> LoginResponse:
        """Mint an access/refresh pair and persist the refresh token hash (commits)."""
        access_token = create_access_token(user.id, user.access_level)
        refresh_token, expires_at = create_refresh_token(user.id)
        self.token_repo.add(
            RefreshToken(
                user_id=user.id,
                token_hash=hash_token(refresh_token),
                expires_at=expires_at,
            )
        )
        user.last_seen_at = utc_now()
        await self.session.commit()
        return LoginResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            access_level=user.access_level,
        )

    async def authenticate(self, email: str, password: str) -> LoginResponse | None:
        """Check credentials and return tokens. Returns None if authentication fails."""
        try:
            user = await self.user_repo.get_by_email(email)

            # Always verify a hash so unknown emails take as long as wrong passwords
            password_hash = user.hashed_password if user and user.hashed_password else None
            password_valid = verify_password(password, password_hash or DUMMY_PASSWORD_HASH)

            if user is None or password_hash is None or not password_valid:
                return None
            if not user.is_active:
                return None

            response = await self._issue_tokens(user)
            logger.info("User logged in", user_id=str(user.id), method="password")
            return response
        except Exception:
            await self.session.rollback()
            raise

    async def authenticate_federated(self, identity: GoogleIdentity) -> LoginResponse:
        """Sign in with a verified Google identity, creating a member account on first use."""
        try:
            user = await self.user_repo.get_by_email(identity.email)
            if user is None:
                user = User(
                    email=identity.email,
                    name=_display_name(identity),
                    avatar_url=identity.picture,
                    access_level=AccessLevel.MEMBER.value,
                )
                self.user_repo.add(user)
                await self.session.flush()
                logger.info("User created from Google identity", user_id=str(user.id))
            elif not user.is_active:
                raise AuthenticationError("Account is deactivated")

            response = await self._issue_tokens(user)
            logger.info("User logged in", user_id=str(user.id), method="google")
            return response
        except Exception:
            await self.session.rollback()
            raise

    async def refresh_access_token(self, refresh_token: str) -> RefreshResponse | None:
        """Rotate a refresh token. Returns None if the token is unusable."""
        payload = decode_token(refresh_token)
        if payload is None or payload.get("type") != TokenType.REFRESH:
            return None

        try:
            user_id = UUID(str(payload.get("sub")))
        except ValueError:
            return None

        token_hash = hash_token(refresh_token)
        try:
            db_token = await self.token_repo.get_valid_by_hash(token_hash, for_update=True)
            if db_token is None or not hmac.compare_digest(token_hash, db_token.token_hash):
                return None

            user = await self.user_repo.get_by_id(user_id)
            if user is None or not user.is_active or db_token.user_id != user.id:
                return None

            db_token.revoked = True
            new_refresh_token, new_expires_at = create_refresh_token(user.id)
            self.token_repo.add(
                RefreshToken(
                    user_id=user.id,
                    token_hash=hash_token(new_refresh_token),
                    expires_at=new_expires_at,
                )
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        return RefreshResponse(
            access_token=create_access_token(user.id, user.access_level),
            refresh_token=new_refresh_token,
        )

    async def revoke_refresh_token(self, refresh_token: str) -> bool:
        """Revoke a refresh token. Returns True if a live token was revoked."""
        try:
            db_token = await self.token_repo.get_valid_by_hash(hash_token(refresh_token))
            if db_token is None:
                return False
            db_token.revoked = True
            await self.session.commit()
            return True
        except Exception:
            await self.session.rollback()
            raise

    async def register(self, data: RegisterRequest) -> tuple[User, PasswordStrength]:
        """Create a member account from validated registration data."""
        if await self.user_repo.exists_by_email(data.email):
            raise DomainValidationError("Email is already registered")

        user = User(
            email=data.email.lower(),
            name=data.name,
            hashed_password=hash_password(data.password),
            phone=data.phone,
            position=data.position,
            access_level=AccessLevel.MEMBER.value,
        )
        self.user_repo.add(user)
        try:
            await self.session.commit()
            await self.session.refresh(user)
        except IntegrityError as e:
            await self.session.rollback()
            raise DomainValidationError("Email is already registered") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User registered", user_id=str(user.id))
        return user, password_strength(data.password)

    async def reset_password(self, email: str) -> bool:
        """Replace the password with a temporary one and mail it.

        Returns whether the email was handed to the relay. Existing sessions are revoked.
        The super administrator account is never reset from this anonymous flow.
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or not user.is_active:
            raise NotFoundError("No active account with this email")
        if is_super_admin(user.access_level):
            logger.warning("Password reset refused for super administrator", user_id=str(user.id))
            raise PermissionDeniedError("This account's password cannot be reset by email")

        temporary_password = generate_temporary_password()
        try:
            user.hashed_password = hash_password(temporary_password)
            user.updated_at = utc_now()
            await self.token_repo.revoke_all_for_user(user.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Temporary password issued", user_id=str(user.id))
        return await asyncio.to_thread(
            send_temporary_password_email, user.email, user.name, temporary_password
        )


def _display_name(identity: GoogleIdentity) -> str:
    name = (identity.name or identity.email.split("@", 1)[0]).strip()
    if len(name) < NAME_MIN_LENGTH:
        name = identity.email.split("@", 1)[0]
    return name[:NAME_MAX_LENGTH].ljust(NAME_MIN_LENGTH, "_")
