import pytest

from workout_api.core.security import (
    PasswordVerificationError,
    hash_password,
    verify_password,
)
from workout_api.domain.models.user import User


def test_hash_is_salted_bcrypt():
    first = hash_password("s3cret-password")
    second = hash_password("s3cret-password")
    assert first.startswith("$2b$")
    assert first != second
    assert "s3cret-password" not in first


def test_verify_only_matches_exact_plaintext():
    hashed = hash_password("s3cret-password")
    assert verify_password("s3cret-password", hashed) is True
    for candidate in ["", "s3cret-passwor", "S3cret-password", "s3cret-password "]:
        assert verify_password(candidate, hashed) is False


def test_verify_malformed_hash_raises():
    with pytest.raises(PasswordVerificationError):
        verify_password("anything", "not-a-bcrypt-hash")


def test_verify_without_hash_raises():
    with pytest.raises(PasswordVerificationError):
        verify_password("anything", None)


def test_user_password_uses_most_recent_set():
    user = User(username="alice", email="alice@example.com")
    user.set_password("first-password")
    user.set_password("second-password")

    assert user.password_matches("second-password") is True
    assert user.password_matches("first-password") is False
    assert "second-password" not in vars(user).values()
