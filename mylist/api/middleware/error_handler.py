"""
Error Handler Middleware

Global exception handling for the API.

Provides consistent error responses across all endpoints by catching
exceptions and converting them to standardized JSON responses.

Error Response Format:
======================
    {
        "error": {
            "code": "INVALID_CURSOR",
            "message": "Invalid cursor",
            "details": {}
        }
    }

Exception Handling:
===================
1. MyListException subclasses → Use their status_code and to_dict()
2. Request / Pydantic validation errors → 400 VALIDATION_ERROR with details
3. Other exceptions → 500 with generic message (details hidden)

Usage:
======
    from mylist.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any, Sequence

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from mylist.shared.core.exceptions import MyListException
from mylist.shared.core.logging import logger


def _validation_response(request: Request, errors: Sequence[Any]) -> JSONResponse:
    errors = jsonable_encoder(errors)
    logger.warning(
        "Validation error",
        errors=errors,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": errors},
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Should be called during application initialization to register
    exception handlers for all routes.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(MyListException)
    async def mylist_exception_handler(
        request: Request,
        exc: MyListException,
    ) -> JSONResponse:
        """
        Handle application exceptions.

        All custom exceptions inherit from MyListException and include:
        - status_code: HTTP status code
        - error_code: Machine-readable error code
        - message: Human-readable message
        - details: Additional context
        """
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle request validation errors.

        These occur when the body, query or headers don't match the route
        signature (e.g. an unknown contentType or a non-integer limit).
        """
        return _validation_response(request, exc.errors())

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors raised outside request parsing."""
        return _validation_response(request, exc.errors())

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Catches any unhandled exception and returns a generic error.
        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "details": {},
                }
            },
        )
