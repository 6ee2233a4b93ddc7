"""Turn exceptions raised while handling a request into JSON responses.

Every error body is ``{"message": "..."}``.
"""

import logging

from kennel.errors import HTTPError
from kennel.http.request import Request
from kennel.http.response import Response

logger = logging.getLogger("kennel.server")

INTERNAL_ERROR_MESSAGE = "Something went wrong"


def message_body(message: str) -> dict[str, str]:
    """The ``{"message": ...}`` body shared by errors and confirmations."""
    return {"message": message}


def http_error_response(exc: HTTPError, request: Request) -> Response:
    """Render an ``HTTPError`` with its status, detail and extra headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = Response.from_json(message_body(exc.detail or f"Error {exc.status}"), exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def internal_error_response(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Log *exc* with its traceback and answer 500.

    The client sees a generic message, plus the exception text when
    *debug* is set.
    """
    logger.exception("500 %s %s", request.method, request.path)
    body = message_body(INTERNAL_ERROR_MESSAGE)
    if debug:
        body["error"] = f"{type(exc).__name__}: {exc}"
    return Response.from_json(body, 500)
