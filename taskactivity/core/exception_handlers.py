"""
Exception handlers for the FastAPI application.

API-style requests get JSON bodies; browser requests are redirected to the
login or access-denied pages.
"""
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from taskactivity.core.exceptions import (
    AccessDeniedError,
    AuthenticationRequiredError,
    NotFoundError,
)
from taskactivity.schemas import ApiResponse

logger = logging.getLogger(__name__)

ACCESS_DENIED_PAGE_MESSAGE = (
    "Sorry, you don't have permission to access this page. "
    "Please contact your administrator if you believe this is an error."
)


def is_api_request(request: Request) -> bool:
    """AJAX, /api/ paths, or clients asking for JSON but not HTML"""
    if request.headers.get("X-Requested-With") == "XMLHttpRequest":
        return True
    if request.url.path.startswith("/api/"):
        return True
    accept = request.headers.get("Accept", "")
    return "application/json" in accept and "text/html" not in accept


async def authentication_required_handler(request: Request, exc: AuthenticationRequiredError):
    if is_api_request(request):
        return JSONResponse(
            status_code=401,
            content={"error": "Unauthorized", "message": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return RedirectResponse(url="/login", status_code=303)


async def access_denied_handler(request: Request, exc: AccessDeniedError):
    logger.warning(f"Access denied for {request.method} {request.url.path}")
    if is_api_request(request):
        return JSONResponse(
            status_code=403,
            content={"error": "Access Denied", "message": exc.message},
        )
    request.session["accessDeniedMessage"] = ACCESS_DENIED_PAGE_MESSAGE
    request.session["requestedUrl"] = request.url.path
    return RedirectResponse(url="/access-denied", status_code=303)


async def value_error_handler(request: Request, exc: ValueError):
    logger.warning(f"Business validation error: {exc}")
    return JSONResponse(status_code=400, content=ApiResponse.error(str(exc)).model_dump())


async def not_found_handler(request: Request, exc: NotFoundError):
    logger.debug(f"Not found: {exc}")
    return JSONResponse(status_code=404, content=ApiResponse.error(str(exc)).model_dump())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "form")]
        errors[".".join(loc) or "request"] = err.get("msg", "Invalid value")
    logger.debug(f"Validation error occurred: {errors}")
    return JSONResponse(
        status_code=400,
        content=ApiResponse.error("Validation failed", errors).model_dump(),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log any unhandled exception with an error id the client can quote back.
    """
    error_id = uuid.uuid4().hex
    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""
    app.add_exception_handler(AuthenticationRequiredError, authentication_required_handler)
    app.add_exception_handler(AccessDeniedError, access_denied_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
