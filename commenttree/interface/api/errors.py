"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from commenttree.domain.error import (
    DomainError,
    InternalError,
    InvalidIdError,
    InvalidQueryError,
    NotFoundError,
    ParentDeletedError,
    ParentNotFoundError,
    ThreadTooDeepError,
)

ERROR_STATUS: dict[type[DomainError], int] = {
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InvalidQueryError: status.HTTP_400_BAD_REQUEST,
    InvalidIdError: status.HTTP_400_BAD_REQUEST,
    ParentNotFoundError: status.HTTP_404_NOT_FOUND,
    ParentDeletedError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ThreadTooDeepError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error; unknown kinds are server errors."""
    for error_type in type(error).__mro__:
        if error_type in ERROR_STATUS:
            return ERROR_STATUS[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers translating errors into ``{"detail": ...}`` bodies.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logfire.error(
                "Request failed",
                code=exc.code,
                path=request.url.path,
                method=request.method,
            )
        else:
            logfire.warn(
                "Request rejected",
                code=exc.code,
                detail=str(exc),
                path=request.url.path,
                method=request.method,
            )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    # Malformed query parameters and bodies are client errors, not 422s
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logfire.warn(
            "Request validation failed",
            path=request.url.path,
            method=request.method,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )
