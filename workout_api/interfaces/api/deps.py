"""FastAPI dependency — identity attached by the identity middleware."""

from fastapi import Request

from workout_api.core.middleware import get_identity
from workout_api.domain.identity import Identity


def current_identity(request: Request) -> Identity:
    """Identity of the caller; raises MissingIdentityError if the middleware did not run."""
    return get_identity(request)
