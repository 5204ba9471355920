"""Error handling module for the Pagewise API."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    InvalidCursorError,
    NotFoundError,
    ConflictError,
    UnprocessableEntityError,
    InternalServerError,
    ServiceUnavailableError,
    create_problem_response,
    problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "InvalidCursorError",
    "NotFoundError",
    "ConflictError",
    "UnprocessableEntityError",
    "InternalServerError",
    "ServiceUnavailableError",
    "create_problem_response",
    "problem_response",
    "register_exception_handlers"
]
