"""
HTTP error helpers shared by the resource services.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

# Errors raised by asyncpg while running a request's SQL. InterfaceError also
# covers client-side DataError (parameter encoding).
DB_ERRORS: tuple[type[BaseException], ...] = (asyncpg.PostgresError, asyncpg.InterfaceError)


def database_error(detail: str, exc: BaseException) -> HTTPException:
    logger.error("db_request_failed detail=%r", detail, exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )


def not_found(resource: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{resource} not found.",
    )


def invalid_body(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    )


def missing_business() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Referenced business does not exist.",
    )
