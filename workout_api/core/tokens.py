"""Opaque bearer token generation."""

import base64
import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

SCOPE_AUTH = "authentication"


@dataclass
class IssuedToken:
    plaintext: str
    hash: bytes
    user_id: int
    expiry: datetime
    scope: str


def hash_token(plaintext: str) -> bytes:
    return hashlib.sha256(plaintext.encode("utf-8")).digest()


def generate_token(user_id: int, ttl: timedelta, scope: str) -> IssuedToken:
    """Mint a token for ``user_id`` that expires ``ttl`` from now."""
    random_bytes = secrets.token_bytes(32)
    plaintext = base64.b32encode(random_bytes).decode("ascii").rstrip("=")
    return IssuedToken(
        plaintext=plaintext,
        hash=hash_token(plaintext),
        user_id=user_id,
        expiry=datetime.now(timezone.utc) + ttl,
        scope=scope,
    )
