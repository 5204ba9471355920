"""Problem Details (RFC 9457) responses for the Pagewise API."""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
from fastapi import Request
from fastapi.responses import JSONResponse


PROBLEM_CONTENT_TYPE = "application/problem+json"


class ProblemDetail(BaseModel):
    """Problem Details as defined in RFC 9457."""

    type: str = Field(default="about:blank", description="A URI reference that identifies the problem type")
    title: str = Field(description="A short, human-readable summary of the problem type")
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(default=None, description="A human-readable explanation specific to this occurrence")
    instance: Optional[str] = Field(default=None, description="A URI reference that identifies the specific occurrence")

    # Extension members (e.g. max_page_size) are kept as extra fields
    model_config = {"extra": "allow"}


def problem_response(problem: ProblemDetail, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """Render a ProblemDetail as an application/problem+json response."""
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(mode="json", exclude_none=True),
        media_type=PROBLEM_CONTENT_TYPE,
        headers=headers
    )


class ProblemDetailException(Exception):
    """Base exception rendered as a Problem Details response.

    Subclasses fix the HTTP status and title through class attributes and
    may provide a default detail and a problem type URI. Any extra keyword
    arguments become extension members of the problem body.
    """

    status: int = 500
    title: str = "Internal Server Error"
    type_uri: str = "about:blank"
    default_detail: Optional[str] = None

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        status: Optional[int] = None,
        title: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        **extensions: Any
    ):
        if status is not None:
            self.status = status
        if title is not None:
            self.title = title
        if type_uri is not None:
            self.type_uri = type_uri
        self.detail = detail if detail is not None else self.default_detail
        self.instance = instance
        self.extensions = extensions
        super().__init__(self.detail or self.title)

    def to_problem_detail(self, request: Optional[Request] = None) -> ProblemDetail:
        """Build the problem body, using the request path as instance when unset."""
        instance = self.instance
        if instance is None and request is not None:
            instance = str(request.url.path)

        return ProblemDetail(
            type=self.type_uri,
            title=self.title,
            status=self.status,
            detail=self.detail,
            instance=instance,
            **self.extensions
        )

    def to_response(self, request: Optional[Request] = None) -> JSONResponse:
        return problem_response(self.to_problem_detail(request))


class BadRequestError(ProblemDetailException):
    """400 Bad Request error."""

    status = 400
    title = "Bad Request"


class InvalidCursorError(BadRequestError):
    """400 raised when a pagination cursor cannot be used."""

    type_uri = "/problems/invalid-cursor"
    default_detail = "Invalid pagination cursor"


class NotFoundError(ProblemDetailException):
    """404 Not Found error."""

    status = 404
    title = "Not Found"
    default_detail = "Resource not found"


class ConflictError(ProblemDetailException):
    """409 Conflict error."""

    status = 409
    title = "Conflict"


class UnprocessableEntityError(ProblemDetailException):
    """422 Unprocessable Entity error."""

    status = 422
    title = "Unprocessable Entity"


class InternalServerError(ProblemDetailException):
    """500 Internal Server Error."""

    default_detail = "Internal server error"


class ServiceUnavailableError(ProblemDetailException):
    """503 Service Unavailable error."""

    status = 503
    title = "Service Unavailable"
    default_detail = "Service temporarily unavailable"


def create_problem_response(
    status: int,
    title: str,
    detail: Optional[str] = None,
    type_uri: str = "about:blank",
    instance: Optional[str] = None,
    request: Optional[Request] = None,
    headers: Optional[Dict[str, str]] = None,
    **extensions: Any
) -> JSONResponse:
    """Create a Problem Details response without raising.

    Args:
        status: HTTP status code
        title: Short summary of the problem type
        detail: Explanation of this occurrence
        type_uri: Problem type URI
        instance: Occurrence URI; defaults to the request path
        request: Current request, if any
        headers: Extra response headers
        **extensions: Additional members of the problem body

    Returns:
        JSONResponse with the application/problem+json media type
    """
    if instance is None and request is not None:
        instance = str(request.url.path)

    problem = ProblemDetail(
        type=type_uri,
        title=title,
        status=status,
        detail=detail,
        instance=instance,
        **extensions
    )
    return problem_response(problem, headers=headers)
