"""
Application error types.

Each error carries the HTTP status it maps to. The handlers registered in
main.py render them as {"error": {"message": ..., "status": ...}}.
"""

from typing import List, Optional, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

ErrorMessage = Union[str, List[str]]


class AppError(Exception):
    """Base error with a message and an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[ErrorMessage] = None, status_code: Optional[int] = None):
        self.message = message if message is not None else self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(AppError):
    """404 NOT FOUND error."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


class UnauthorizedError(AppError):
    """401 UNAUTHORIZED error."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class BadRequestError(AppError):
    """400 BAD REQUEST error."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class ForbiddenError(AppError):
    """403 FORBIDDEN error."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


def error_body(message: ErrorMessage, status_code: int) -> dict:
    return {"error": {"message": message, "status": status_code}}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.status_code),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema failures are client errors: 400 with one message per failed field."""
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(messages, status.HTTP_400_BAD_REQUEST),
    )
