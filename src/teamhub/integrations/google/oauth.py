"""Google OAuth helpers: offline access tokens and ID-token verification."""

import time
from dataclasses import dataclass

import httpx

from src.teamhub.core.logging import get_logger

logger = get_logger(__name__)

TOKEN_URL = "https://oauth2.googleapis.com/token"
TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")

# Refresh this many seconds before Google says the token expires
_EXPIRY_MARGIN_SECONDS = 60


class GoogleAuthError(Exception):
    """Google rejected a token request or an ID token."""


class GoogleTokenProvider:
    """Mints access tokens from a stored refresh token and caches them until expiry."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        refresh_token: str,
    ):
        self._client = client
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_token = refresh_token
        self._access_token: str | None = None
        self._expires_at: float = 0.0

    async def get_access_token(self) -> str:
        if self._access_token and time.monotonic() < self._expires_at:
            return self._access_token

        try:
            response = await self._client.post(
                TOKEN_URL,
                data={
                    "grant_type": "refresh_token",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "refresh_token": self._refresh_token,
                },
            )
        except httpx.HTTPError as e:
            raise GoogleAuthError(f"Token endpoint unreachable: {e}") from e

        if response.status_code != 200:
            raise GoogleAuthError(f"Token refresh failed with status {response.status_code}")

        try:
            payload = response.json()
            access_token = str(payload["access_token"])
            expires_in = int(payload.get("expires_in", 3600))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise GoogleAuthError(f"Token endpoint returned an unusable response: {e}") from e
        self._access_token = access_token
        self._expires_at = time.monotonic() + max(expires_in - _EXPIRY_MARGIN_SECONDS, 0)
        logger.debug("Google access token refreshed", expires_in=expires_in)
        return access_token

    def invalidate(self) -> None:
        self._access_token = None
        self._expires_at = 0.0


@dataclass(frozen=True)
class GoogleIdentity:
    subject: str
    email: str
    name: str | None = None
    picture: str | None = None


async def verify_id_token(
    client: httpx.AsyncClient,
    id_token: str,
    audience: str,
) -> GoogleIdentity:
    """Validate a Google ID token with the tokeninfo endpoint.

    Raises:
        GoogleAuthError: if the token is invalid, issued for another client,
            or carries an unverified email.
    """
    try:
        response = await client.get(TOKENINFO_URL, params={"id_token": id_token})
    except httpx.HTTPError as e:
        raise GoogleAuthError(f"Tokeninfo endpoint unreachable: {e}") from e

    if response.status_code != 200:
        raise GoogleAuthError("Invalid Google ID token")

    try:
        claims = response.json()
    except ValueError as e:
        raise GoogleAuthError("Tokeninfo endpoint returned an unusable response") from e
    if not isinstance(claims, dict):
        raise GoogleAuthError("Tokeninfo endpoint returned an unusable response")
    if claims.get("aud") != audience:
        raise GoogleAuthError("ID token was issued for another client")
    if claims.get("iss") not in GOOGLE_ISSUERS:
        raise GoogleAuthError("ID token has an unexpected issuer")
    if str(claims.get("email_verified", "")).lower() != "true":
        raise GoogleAuthError("Google account email is not verified")
    if not claims.get("email") or not claims.get("sub"):
        raise GoogleAuthError("ID token is missing the email or subject claim")

    return GoogleIdentity(
        subject=claims["sub"],
        email=claims["email"].lower(),
        name=claims.get("name"),
        picture=claims.get("picture"),
    )
