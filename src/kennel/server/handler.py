"""ASGI HTTP handling: scope in, ``Response`` out.

Builds the ``Request``, runs it through the middleware chain into the
router, and sends whatever comes back. Nothing raised on the way
escapes to the server; it becomes an error response instead.
"""

import inspect
from typing import Any

from kennel._internal.asgi import Receive, Scope, Send
from kennel._internal.invoke import invoke
from kennel.errors import HTTPError
from kennel.http.request import Request
from kennel.http.response import Response
from kennel.middleware.protocol import Middleware, Next
from kennel.routing.route import RouteMatch
from kennel.routing.router import Router
from kennel.server.errors import http_error_response, internal_error_response
from kennel.server.negotiation import negotiate
from kennel.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Middleware, ...],
    debug: bool,
) -> None:
    """Serve one HTTP request end to end."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    async def dispatch(req: Request) -> Response:
        return await _call_route(router.match(req.method, req.path), req)

    chain: Next = dispatch
    for mw in reversed(middleware):
        chain = _wrap(mw, chain)

    try:
        response = await chain(request)
    except HTTPError as exc:
        response = http_error_response(exc, request)
    except Exception as exc:
        response = internal_error_response(exc, request, debug=debug)

    await send_response(response, send, head=request.method == "HEAD")


def _wrap(mw: Middleware, inner: Next) -> Next:
    async def call(req: Request) -> Response:
        return await mw(req, inner)

    return call


async def _call_route(match: RouteMatch, request: Request) -> Response:
    request = request.with_path_params(match.path_params)
    handler = match.route.handler
    result = await invoke(handler, **_handler_kwargs(handler, request))
    return negotiate(result)


def _handler_kwargs(handler: Any, request: Request) -> dict[str, Any]:
    """Pass ``request`` and any path parameter the handler names."""
    kwargs: dict[str, Any] = {}
    for name in inspect.signature(handler).parameters:
        if name == "request":
            kwargs[name] = request
        elif name in request.path_params:
            kwargs[name] = request.path_params[name]
    return kwargs
