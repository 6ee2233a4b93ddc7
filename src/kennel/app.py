"""Kennel application object.

Routes, the fallback, middleware and lifecycle hooks are collected while
the module that builds the app runs. The first request, lifespan event or
``app.run()`` compiles them into a ``Router`` and locks the app.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from kennel._internal.asgi import Receive, Scope, Send
from kennel._internal.invoke import run_hooks
from kennel._internal.types import Handler, Hook
from kennel.config import AppConfig
from kennel.middleware.protocol import Middleware
from kennel.routing.route import Route
from kennel.routing.router import Router
from kennel.server.handler import handle_request

logger = logging.getLogger("kennel.server")

FALLBACK_PATH = "/{path:path}"


@dataclass(slots=True)
class _Registration:
    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None


class App:
    """An ASGI application serving an ordered route table.

    Routes match in the order they were registered and the first match
    wins. The handler given to ``@app.fallback()`` answers whatever is
    left, for any method.

    Thread safety:
        Registration happens once, from a single thread. Compilation is
        guarded by a lock and a second flag check, so concurrent first
        requests build the router exactly once.
    """

    __slots__ = (
        "_compile_lock",
        "_compiled",
        "_fallback",
        "_middleware",
        "_registrations",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._registrations: list[_Registration] = []
        self._fallback: Handler | None = None
        self._middleware: list[Middleware] = []
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._compiled = False
        self._compile_lock = threading.Lock()
        self._router: Router | None = None

    # -- Registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator binding *handler* to *path* for *methods* (GET by default).

        ``{id}`` in *path* captures one segment; ``{rest:path}`` captures
        everything after it. *name* is what ``kennel routes`` prints.
        """

        def register(func: Handler) -> Handler:
            self._require_open()
            self._registrations.append(_Registration(path, func, methods, name))
            return func

        return register

    def fallback(self) -> Callable[[Handler], Handler]:
        """Decorator for the handler of unmatched requests.

        It is tried only after every route has failed, receives the
        unmatched path as ``path``, and may be registered once.
        """

        def register(func: Handler) -> Handler:
            self._require_open()
            if self._fallback is not None:
                msg = "A fallback handler is already registered."
                raise RuntimeError(msg)
            self._fallback = func
            return func

        return register

    def add_middleware(self, middleware: Middleware) -> None:
        """Append *middleware*; earlier middleware wraps later middleware."""
        self._require_open()
        self._middleware.append(middleware)

    def on_startup(self, func: Hook) -> Hook:
        """Run *func* (sync or async) before the first request is served."""
        self._require_open()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Run *func* (sync or async) once the server stops."""
        self._require_open()
        self._shutdown_hooks.append(func)
        return func

    @property
    def routes(self) -> list[Route]:
        """Routes in match order with the fallback last. Compiles the app."""
        return self._compile().routes

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with uvicorn until interrupted."""
        from kennel.server.serve import run_server

        self._compile()
        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            log_level=self.config.effective_log_level,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        router = self._compile()
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        await handle_request(
            scope,
            receive,
            send,
            router=router,
            middleware=tuple(self._middleware),
            debug=self.config.debug,
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Compile the app and run the startup hooks in order."""
        self._compile()
        await run_hooks(self._startup_hooks)

    async def shutdown(self) -> None:
        """Run the shutdown hooks in order."""
        await run_hooks(self._shutdown_hooks)

    # -- Compilation --

    def _compile(self) -> Router:
        if not self._compiled:
            with self._compile_lock:
                if not self._compiled:
                    self._router = self._build_router()
                    self._compiled = True
        assert self._router is not None
        return self._router

    def _build_router(self) -> Router:
        router = Router()
        for reg in self._registrations:
            methods = frozenset(m.upper() for m in reg.methods or ["GET"])
            router.add(Route(reg.path, reg.handler, methods, reg.name))
        if self._fallback is not None:
            router.set_fallback(Route(FALLBACK_PATH, self._fallback, frozenset(), "fallback"))
        router.compile()
        return router

    def _require_open(self) -> None:
        if self._compiled:
            msg = (
                "The app is already serving; register routes, middleware "
                "and hooks before the first request."
            )
            raise RuntimeError(msg)
