"""Built-in middleware: JSON body parsing.

Reads the request body once, before routing, and parses it when the
Content-Type declares JSON. Handlers then read ``request.data``.
"""

import logging

from kennel.errors import BadRequest, PayloadTooLarge
from kennel.http.request import Request
from kennel.http.response import Response
from kennel.middleware.protocol import Next

logger = logging.getLogger("kennel.server")

_BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "DELETE"})


class JSONBody:
    """Parse ``application/json`` request bodies into ``request.data``.

    - No body, or a non-JSON Content-Type: ``request.data`` is ``None``.
    - Malformed JSON, invalid UTF-8, ``NaN``/``Infinity``, or nesting too
      deep to decode: ``BadRequest`` (400).
    - Body larger than *max_length* bytes: ``PayloadTooLarge`` (413), raised
      from the declared Content-Length or while the body is still arriving.

    Usage::

        app.add_middleware(JSONBody(max_length=app.config.max_content_length))
    """

    __slots__ = ("max_length",)

    def __init__(self, max_length: int = 1024 * 1024) -> None:
        self.max_length = max_length

    async def __call__(self, request: Request, next: Next) -> Response:
        if request.method in _BODYLESS_METHODS or not request.is_json:
            return await next(request)

        declared = request.content_length
        if declared is not None and declared > self.max_length:
            raise PayloadTooLarge(self.max_length)

        await request.body(limit=self.max_length)

        try:
            await request.json()
        except (ValueError, RecursionError) as exc:
            logger.debug("malformed JSON body on %s %s: %s", request.method, request.path, exc)
            raise BadRequest("Malformed JSON body") from exc

        return await next(request)
