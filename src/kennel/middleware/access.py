"""Built-in middleware: access logging.

Emits one INFO line per request on the ``kennel.access`` logger.
"""

import logging
import time

from kennel.errors import HTTPError
from kennel.http.request import Request
from kennel.http.response import Response
from kennel.middleware.protocol import Next

access_logger = logging.getLogger("kennel.access")


class RequestLogger:
    """Log ``METHOD path -> status (elapsed ms)`` for each request.

    Register it first so it wraps the other middleware and times the
    whole pipeline. Exceptions raised further in are logged with the
    status they will be answered with (the ``HTTPError`` status, or 500)
    and re-raised for the error handling in ``server.handler``.
    """

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or access_logger

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.perf_counter()
        try:
            response = await next(request)
        except HTTPError as exc:
            self._log(request, exc.status, start)
            raise
        except Exception:
            self._log(request, 500, start)
            raise
        self._log(request, response.status, start)
        return response

    def _log(self, request: Request, status: int, start: float) -> None:
        elapsed_ms = (time.perf_counter() - start) * 1000
        self.logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.path,
            status,
            elapsed_ms,
        )
