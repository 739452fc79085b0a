"""Input validators for account data."""

import re
from enum import Enum
from typing import Final

PHONE_REGEX: Final[str] = r"^01[0-9]-?[0-9]{3,4}-?[0-9]{4}$"
PASSWORD_SPECIAL_CHARS: Final[str] = '!@#$%^&*(),.?":{}|<>'

NAME_MIN_LENGTH: Final[int] = 2
NAME_MAX_LENGTH: Final[int] = 20
POSITION_MAX_LENGTH: Final[int] = 50
PASSWORD_MIN_LENGTH: Final[int] = 8

_PHONE_PATTERN: Final[re.Pattern[str]] = re.compile(PHONE_REGEX)


class PasswordStrength(str, Enum):
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


def validate_name(name: str) -> str:
    name = name.strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValueError(
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    return name


def validate_phone(phone: str | None) -> str | None:
    """Korean mobile numbers, with or without dashes. Blank means no phone."""
    if phone is None or not phone.strip():
        return None
    phone = phone.strip()
    if not _PHONE_PATTERN.match(phone):
        raise ValueError("Invalid phone number format (e.g. 010-1234-5678)")
    return phone


def validate_position(position: str | None) -> str | None:
    if position is None or not position.strip():
        return None
    position = position.strip()
    if len(position) > POSITION_MAX_LENGTH:
        raise ValueError(f"Position must be at most {POSITION_MAX_LENGTH} characters")
    return position


def password_rule_failures(password: str) -> list[str]:
    """Return the messages of every password rule the password breaks."""
    failures: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        failures.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"[a-z]", password):
        failures.append("Password must contain a lowercase letter")
    if not re.search(r"[A-Z]", password):
        failures.append("Password must contain an uppercase letter")
    if not re.search(r"[0-9]", password):
        failures.append("Password must contain a digit")
    if not any(ch in PASSWORD_SPECIAL_CHARS for ch in password):
        failures.append("Password must contain a special character")
    return failures


def password_strength(password: str) -> PasswordStrength:
    passed = 5 - len(password_rule_failures(password))
    if passed == 5:
        return PasswordStrength.STRONG
    if passed >= 3:
        return PasswordStrength.MEDIUM
    return PasswordStrength.WEAK


def validate_password(password: str) -> str:
    failures = password_rule_failures(password)
    if failures:
        raise ValueError("; ".join(failures))
    return password
