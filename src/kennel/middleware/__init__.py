"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    JSONBody -- Parse JSON request bodies into ``request.data``
    RequestLogger -- One access-log line per request
"""

from kennel.middleware.access import RequestLogger
from kennel.middleware.body import JSONBody
from kennel.middleware.protocol import Middleware, Next

__all__ = [
    "JSONBody",
    "Middleware",
    "Next",
    "RequestLogger",
]
