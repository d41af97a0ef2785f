"""
Error Handler Middleware

Global exception handling for the API. Every error body has the shape:

    {"error": {"code": "...", "message": "...", "details": {...}}}
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException

from access_control.core.exceptions import AccessControlException, TransactionError
from access_control.core.logging import logger


def _validation_response(errors: list) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": jsonable_encoder(errors)},
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up global exception handlers.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(AccessControlException)
    async def access_control_exception_handler(
        _request: Request, exc: AccessControlException
    ) -> JSONResponse:
        """Handle application exceptions."""
        if isinstance(exc, TransactionError):
            logger.error(
                "Transaction failed",
                error=str(exc.original_error) if exc.original_error else None,
            )
        else:
            logger.warning(
                "Application error",
                error_code=exc.error_code,
                message=exc.message,
                status_code=exc.status_code,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        _request: Request, exc: HTTPException
    ) -> JSONResponse:
        """Handle HTTP errors: malformed path ids, unknown routes."""
        code = "VALIDATION_ERROR" if exc.status_code == 400 else "HTTP_ERROR"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"code": code, "message": str(exc.detail), "details": {}}},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request body/query validation errors."""
        logger.warning("Request validation error", errors=str(exc.errors()))
        return _validation_response(exc.errors())

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        _request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        logger.warning("Validation error", errors=str(exc.errors()))
        return _validation_response(exc.errors())

    @app.exception_handler(Exception)
    async def general_exception_handler(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                }
            },
        )
