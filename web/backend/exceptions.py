#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import RecordNotFoundError

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class TalentNotFoundException(ServiceException):
    """Raised when a talent is not found."""
    pass


class JobNotFoundException(ServiceException):
    """Raised when a job is not found."""
    pass


class InvalidStatusTransitionException(ServiceException):
    """Raised when a record cannot move to the requested status."""
    pass


class InvalidUpdateException(ServiceException):
    """Raised when an update names fields that cannot be changed."""
    pass


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    if isinstance(exc, (TalentNotFoundException, JobNotFoundException)):
        status_code = 404
    elif isinstance(exc, (InvalidStatusTransitionException, InvalidUpdateException)):
        status_code = 400

    if status_code == 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected request to {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def record_not_found_handler(
    request: Request,
    exc: RecordNotFoundError
) -> JSONResponse:
    """Map a missing job or talent in a match query to 404."""
    return JSONResponse(
        status_code=404,
        content={
            "success": False,
            "error": str(exc),
            "type": "NotFound"
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
