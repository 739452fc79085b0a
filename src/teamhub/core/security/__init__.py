"""Security utilities - crypto and validators.

Re-exports all security-related functions for convenience.
"""

from src.teamhub.core.security.crypto import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    create_refresh_token,
    decode_token,
    generate_temporary_password,
    hash_password,
    hash_token,
    verify_password,
)
from src.teamhub.core.security.validators import (
    PasswordStrength,
    password_rule_failures,
    password_strength,
    validate_name,
    validate_password,
    validate_phone,
    validate_position,
)

__all__ = [
    # Crypto
    "DUMMY_PASSWORD_HASH",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "generate_temporary_password",
    "hash_password",
    "hash_token",
    "verify_password",
    # Validators
    "PasswordStrength",
    "password_rule_failures",
    "password_strength",
    "validate_name",
    "validate_password",
    "validate_phone",
    "validate_position",
]
