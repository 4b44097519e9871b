"""Request authentication for the Store API."""

from fastapi import Depends, Header
from starlette.concurrency import run_in_threadpool

from shared.errors import AuthenticationFailed, PermissionDenied
from shared.logging import add_context
from store.auth import AuthenticatedUser, bearer_token, validate_token


async def current_user(authorization: str | None = Header(default=None)) -> AuthenticatedUser:
    """Resolve the caller from the `Authorization` header or fail with 401."""
    token = bearer_token(authorization)
    if token is None:
        raise AuthenticationFailed("Missing authorization token")

    # Adapters may block on network I/O
    user = await run_in_threadpool(validate_token, token)
    if user is None:
        raise AuthenticationFailed("Invalid or expired token")

    add_context(user_id=user.id)
    return user


async def require_admin(user: AuthenticatedUser = Depends(current_user)) -> AuthenticatedUser:
    if not user.is_admin:
        raise PermissionDenied("Admin role required")
    return user
