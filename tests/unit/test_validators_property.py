"""Property-based tests for validators using hypothesis."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from src.teamhub.core.security import (
    PasswordStrength,
    password_rule_failures,
    password_strength,
    validate_phone,
)
from src.teamhub.schemas import RegisterRequest

pytestmark = pytest.mark.unit


# Strategy for passwords that satisfy every rule: each character class is
# present at least once and the total length is at least 8
strong_password = st.builds(
    lambda lower, upper, digit, special, filler: lower + upper + digit + special + filler,
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=10),
    st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=1, max_size=10),
    st.text(alphabet="0123456789", min_size=1, max_size=10),
    st.text(alphabet='!@#$%^&*(),.?":{}|<>', min_size=1, max_size=5),
    st.text(alphabet="abcXYZ019", min_size=4, max_size=20),
)

valid_phone = st.from_regex(r"^01[0-9]-?[0-9]{3,4}-?[0-9]{4}$", fullmatch=True)


@given(password=strong_password)
@settings(max_examples=100)
def test_strong_passwords_accepted(password: str):
    """Passwords meeting every rule register and rate as strong."""
    request = RegisterRequest(email="kim@example.com", password=password, name="김민수")
    assert request.password == password
    assert password_strength(password) == PasswordStrength.STRONG


@given(password=st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=8, max_size=40))
def test_lowercase_only_passwords_rejected(password: str):
    """Passwords missing uppercase, digit and special characters should be rejected."""
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest(email="kim@example.com", password=password, name="김민수")
    errors = exc_info.value.errors()
    assert any(error["loc"] == ("password",) for error in errors)


@given(password=st.text(max_size=60))
def test_strength_matches_rule_failures(password: str):
    """Strength is derived from how many of the five rules pass."""
    passed = 5 - len(password_rule_failures(password))
    strength = password_strength(password)
    if passed == 5:
        assert strength == PasswordStrength.STRONG
    elif passed >= 3:
        assert strength == PasswordStrength.MEDIUM
    else:
        assert strength == PasswordStrength.WEAK


@given(phone=valid_phone)
@settings(max_examples=100)
def test_valid_phones_accepted(phone: str):
    assert validate_phone(phone) == phone


@given(phone=st.from_regex(r"^02-[0-9]{3,4}-[0-9]{4}$", fullmatch=True))
def test_landline_phones_rejected(phone: str):
    """Only mobile numbers (01x) are accepted."""
    with pytest.raises(ValueError):
        validate_phone(phone)


@given(name=st.text(alphabet="가나다라마바사아자차카타파하", min_size=21, max_size=40))
def test_long_names_rejected(name: str):
    with pytest.raises(ValidationError) as exc_info:
        RegisterRequest(email="kim@example.com", password="Testpass1!", name=name)
    errors = exc_info.value.errors()
    assert any(error["loc"] == ("name",) for error in errors)


def test_blank_phone_is_no_phone():
    assert validate_phone("   ") is None
    assert validate_phone(None) is None


def test_short_password_lists_every_failure():
    failures = password_rule_failures("abc")
    assert len(failures) == 4
    assert any("at least 8" in f for f in failures)
