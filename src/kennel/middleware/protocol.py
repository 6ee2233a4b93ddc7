"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The framework checks the shape, not the lineage.
Middleware runs before routing, so it sees every request, including the
ones that end at the fallback route.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from kennel.http.request import Request
from kennel.http.response import Response

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for kennel middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def server_header(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("Server", "kennel")

        # Class middleware
        class JSONBody:
            async def __call__(self, request: Request, next: Next) -> Response:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
