from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger(__name__)


class BookProjectException(Exception):
    """Base exception for book project errors."""

    pass


class UserAlreadyRegisteredError(BookProjectException):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email {email} is already registered")


class NotificationDeliveryError(BookProjectException):
    def __init__(self, address: str, details: str):
        self.address = address
        super().__init__(f"Could not deliver notification to {address}: {details}")


class DatabaseError(BookProjectException):
    def __init__(self, operation: str, details: str):
        super().__init__(f"Database error during {operation}: {details}")


class EmailProviderError(BookProjectException):
    def __init__(self, message: str):
        super().__init__(f"Email provider error: {message}")


# Exception handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.error(f"HTTP error {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Request validation error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": "Invalid request parameters. Please check your input."},
    )


async def response_validation_exception_handler(
    request: Request, exc: ResponseValidationError
):
    logger.error(f"Response validation error: {exc.errors()}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "The server encountered an unexpected error. Please contact support."
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred. Please contact support."},
    )


async def book_project_exception_handler(request: Request, exc: BookProjectException):
    # Anything reaching here was not classified by a request handler.
    logger.error(f"Unclassified book project error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc)},
    )


def add_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(
        ResponseValidationError, response_validation_exception_handler
    )
    app.add_exception_handler(Exception, general_exception_handler)
    app.add_exception_handler(BookProjectException, book_project_exception_handler)
