"""HTTP server entry — serves a kennel App with uvicorn.

uvicorn is imported lazily so that building and testing an app never
requires the server to be installed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kennel.app import App

logger = logging.getLogger("kennel.server")


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    log_level: str = "info",
) -> None:
    """Bind *host*:*port* and serve *app* until interrupted.

    Access logging is done by ``RequestLogger`` middleware, so uvicorn's
    own access log is switched off to avoid duplicate lines.

    Args:
        app: ASGI callable (kennel App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn log level name (``"info"``, ``"debug"``, ...).
    """
    import uvicorn

    logger.info("Listening on http://%s:%d", host, port)
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=log_level.lower(),
        access_log=False,
        lifespan="on",
    )
    uvicorn.Server(config).run()
