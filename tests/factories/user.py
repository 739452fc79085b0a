"""User factory for test data generation."""

from polyfactory import Use

from src.teamhub.core.permissions import AccessLevel
from src.teamhub.core.security import hash_password
from src.teamhub.models import User
from tests.factories.base import BaseFactory, generate_uuid, utc_now

# Default test password - satisfies every password rule
DEFAULT_TEST_PASSWORD = "Testpass1!"


class UserFactory(BaseFactory):
    """Factory for generating User test data."""

    __model__ = User

    id = Use(generate_uuid)
    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    name = "테스트사용자"
    hashed_password = Use(lambda: hash_password(DEFAULT_TEST_PASSWORD))
    phone = None
    position = None
    avatar_url = None
    access_level = AccessLevel.MEMBER.value
    is_active = True
    last_seen_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def super_admin(cls, **kwargs):
        """Create a super-admin (level 0)."""
        return cls.build(
            access_level=AccessLevel.SUPER_ADMIN.value,
            name=kwargs.pop("name", "최고관리자"),
            **kwargs,
        )

    @classmethod
    def admin(cls, **kwargs):
        """Create an admin (level 1)."""
        return cls.build(
            access_level=AccessLevel.ADMIN.value,
            name=kwargs.pop("name", "관리자"),
            **kwargs,
        )

    @classmethod
    def inactive(cls, **kwargs):
        """Create a deactivated member."""
        return cls.build(is_active=False, **kwargs)

    @classmethod
    def federated(cls, **kwargs):
        """Create a member that only ever signed in through Google."""
        return cls.build(hashed_password=None, **kwargs)
