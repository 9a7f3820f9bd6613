"""Mapping of pipeline results onto HTTP responses."""

from fastapi import HTTPException
from fastapi.responses import RedirectResponse

from artwork.models import RedirectTarget
from core.result import ErrorKind, Failure

STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL_ERROR: 500,
}


def status_for(kind: ErrorKind) -> int:
    """HTTP status code for a failure kind."""
    return STATUS_CODES[kind]


def failure_to_http_exception(failure: Failure) -> HTTPException:
    """Build the HTTPException a router raises for a pipeline failure."""
    return HTTPException(status_code=status_for(failure.kind), detail=failure.message)


def redirect_response(target: RedirectTarget, max_age: int | None = None) -> RedirectResponse:
    """Temporary redirect to an upstream URL, marked cacheable.

    Args:
        target: Resolved redirect target
        max_age: Overrides ``target.max_age`` when given
    """
    response = RedirectResponse(url=target.url, status_code=307)
    response.headers["Cache-Control"] = f"max-age={max_age if max_age is not None else target.max_age}"
    return response
