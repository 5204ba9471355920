"""Exception handlers that turn every error into a Problem Details response."""

import logging
from http import HTTPStatus
from typing import Any, Dict, List, Union
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from pydantic import ValidationError

from .problem_details import ProblemDetailException, create_problem_response

logger = logging.getLogger(__name__)


def _request_context(request: Request, **fields: Any) -> Dict[str, Any]:
    """Structured logging fields for the current request."""
    return {"path": str(request.url.path), "method": request.method, **fields}


def status_title(status_code: int) -> str:
    """Standard reason phrase for a status code, or a generic title."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "HTTP Error"


def summarize_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error dicts to JSON-safe location, message and type."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
            "type": str(error.get("type", ""))
        }
        for error in errors
    ]


def format_errors(errors: List[Dict[str, Any]]) -> str:
    """Join errors as ``a -> b: message`` separated by semicolons."""
    return "; ".join(f"{' -> '.join(error['loc'])}: {error['msg']}" for error in errors)


def _validation_problem(request: Request, raw_errors: List[Dict[str, Any]], status: int, prefix: str) -> JSONResponse:
    errors = summarize_errors(raw_errors)
    logger.info(
        f"Validation error ({status}): {len(errors)} errors",
        extra=_request_context(request, errors=errors)
    )
    return create_problem_response(
        status=status,
        title="Validation Error",
        detail=f"{prefix}: {format_errors(errors)}",
        request=request,
        validation_errors=errors
    )


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Handle ProblemDetailException instances."""
    logger.info(
        f"Problem detail exception: {exc.status} - {exc.title}",
        extra=_request_context(request, status_code=exc.status, detail=exc.detail)
    )
    return exc.to_response(request)


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException]
) -> JSONResponse:
    """Handle FastAPI and Starlette HTTP exceptions, keeping their headers."""
    logger.info(
        f"HTTP exception: {exc.status_code} - {exc.detail}",
        extra=_request_context(request, status_code=exc.status_code, detail=exc.detail)
    )
    return create_problem_response(
        status=exc.status_code,
        title=status_title(exc.status_code),
        detail=str(exc.detail) if exc.detail else None,
        request=request,
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Query, path and body validation failures become 422 problems."""
    return _validation_problem(request, exc.errors(), 422, "Validation failed")


async def pydantic_validation_exception_handler(
    request: Request,
    exc: ValidationError
) -> JSONResponse:
    """Validation failures raised outside request parsing become 400 problems."""
    return _validation_problem(request, exc.errors(), 400, "Data validation failed")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__} - {exc}",
        extra=_request_context(request, exception_type=type(exc).__name__),
        exc_info=True
    )

    # Internal details stay in the logs
    return create_problem_response(
        status=500,
        title="Internal Server Error",
        detail="An unexpected error occurred",
        request=request
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(ProblemDetailException, problem_detail_exception_handler)

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)

    # Catch-all for unexpected exceptions
    app.add_exception_handler(Exception, general_exception_handler)
