"""Password hashing and verification."""

from passlib.context import CryptContext

from workout_api.config import get_settings

settings = get_settings()
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class PasswordHashingError(Exception):
    """The hashing backend could not derive a hash."""


class PasswordVerificationError(Exception):
    """A stored hash could not be used for verification."""


def hash_password(password: str) -> str:
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as exc:
        raise PasswordHashingError(str(exc)) from exc


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True only when ``plain_password`` produced ``hashed_password``.

    A mismatch is a plain ``False``. A missing or malformed stored hash raises
    ``PasswordVerificationError``; callers must deny access in that case too.
    """
    if not hashed_password:
        raise PasswordVerificationError("no password hash is set")
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as exc:
        raise PasswordVerificationError(str(exc)) from exc


def dummy_verify() -> None:
    """Spend the same time as a real verification for unknown accounts."""
    pwd_context.dummy_verify()
