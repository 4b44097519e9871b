"""HTTP error mapping shared by the store and identity APIs.

Domain code raises protean's `ValidationError` and `ObjectNotFoundError`;
request authentication raises the two service-level exceptions below.
Every one of them is flattened to a status code and an `{"error": ...}`
body here.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from shared.logging import get_logger

logger = get_logger(__name__)


class AuthenticationFailed(Exception):
    """The request carried no token, or a token the identity service rejected."""


class PermissionDenied(Exception):
    """The caller is authenticated but lacks a required role."""


def _detail(exc):
    return getattr(exc, "messages", None) or str(exc)


async def _validation_error(request: Request, exc: ValidationError):
    logger.info("Request rejected", path=request.url.path, error=_detail(exc))
    return JSONResponse(status_code=400, content={"error": _detail(exc)})


async def _invalid_operation(request: Request, exc: InvalidOperationError):
    return JSONResponse(status_code=400, content={"error": _detail(exc)})


async def _not_found(request: Request, exc: ObjectNotFoundError):
    return JSONResponse(status_code=404, content={"error": _detail(exc)})


async def _authentication_failed(request: Request, exc: AuthenticationFailed):
    logger.warning("Authentication failed", path=request.url.path)
    return JSONResponse(status_code=401, content={"error": str(exc) or "Unauthorized"})


async def _permission_denied(request: Request, exc: PermissionDenied):
    logger.warning("Permission denied", path=request.url.path)
    return JSONResponse(status_code=403, content={"error": str(exc) or "Forbidden"})


def register_error_handlers(app: FastAPI) -> None:
    """Install protean's default handlers, then the service-specific mapping on top."""
    register_exception_handlers(app)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(InvalidOperationError, _invalid_operation)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(AuthenticationFailed, _authentication_failed)
    app.add_exception_handler(PermissionDenied, _permission_denied)
