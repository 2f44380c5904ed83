"""
Middleware configuration for the application.
Includes Correlation ID setup, request logging and identity resolution.
"""

import time
import structlog
from typing import Callable, Optional
from fastapi import Request, Response, status
from asgi_correlation_id import CorrelationIdMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from workout_api.core.exceptions import error_response
from workout_api.core.tokens import SCOPE_AUTH
from workout_api.domain.identity import ANONYMOUS, Authenticated, Identity
from workout_api.domain.models.user import User

logger = structlog.get_logger(__name__)


class MissingIdentityError(RuntimeError):
    """A handler asked for the request identity but none was attached."""


def set_identity(request: Request, identity: Identity) -> None:
    request.state.identity = identity


def get_identity(request: Request) -> Identity:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise MissingIdentityError("missing identity in request")
    return identity


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log requests and responses with timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)

            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time_ms=round(process_time * 1000, 2),
            )

            return response

        except Exception:
            process_time = time.time() - start_time
            logger.exception(
                "Request failed",
                method=request.method,
                path=request.url.path,
                process_time_ms=round(process_time * 1000, 2),
            )
            raise


class IdentityMiddleware(BaseHTTPMiddleware):
    """Attach the caller's identity to ``request.state`` before routing.

    Requests without an Authorization header continue as anonymous. A header
    that is not ``Bearer <token>``, or a token that does not resolve to a
    user, is answered with 401 here and never reaches a handler.
    """

    def __init__(self, app, repository_factory: Callable):
        super().__init__(app)
        self.repository_factory = repository_factory

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await self._authenticate(request, call_next)
        if "Authorization" not in response.headers.get("Vary", ""):
            response.headers.append("Vary", "Authorization")
        return response

    async def _authenticate(self, request: Request, call_next: Callable) -> Response:
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            set_identity(request, ANONYMOUS)
            return await call_next(request)

        header_parts = auth_header.split(" ")
        if len(header_parts) != 2 or header_parts[0] != "Bearer":
            return error_response(
                status.HTTP_401_UNAUTHORIZED,
                "invalid authorization header format",
                {"WWW-Authenticate": "Bearer"},
            )

        try:
            user = await run_in_threadpool(self._lookup_user, request, header_parts[1])
        except SQLAlchemyError as exc:
            logger.error("Token lookup failed", path=request.url.path, error=str(exc))
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")

        if user is None:
            return error_response(
                status.HTTP_401_UNAUTHORIZED,
                "invalid or expired authentication token",
                {"WWW-Authenticate": "Bearer"},
            )

        set_identity(request, Authenticated(user))
        structlog.contextvars.bind_contextvars(user_id=user.id)
        try:
            return await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("user_id")

    def _lookup_user(self, request: Request, token: str) -> Optional[User]:
        db = request.app.state.session_factory()
        try:
            return self.repository_factory(db).get_for_token(SCOPE_AUTH, token)
        finally:
            db.close()


def setup_middleware(app, repository_factory: Callable):
    """Setup all middleware for the application."""

    # Added first so it runs innermost, after the request is logged
    app.add_middleware(IdentityMiddleware, repository_factory=repository_factory)

    # Request Logging
    app.add_middleware(RequestLoggingMiddleware)

    # Correlation ID (outermost so the ID is bound before anything logs)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
