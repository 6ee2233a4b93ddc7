"""The kennel service: dogs and hubs over an in-memory store.

``create_app()`` wires the pieces in order:

1. middleware: access log (outermost), then JSON body parsing
2. resource routes: ``/dogs`` then ``/hubs``
3. the fallback, which answers every unmatched request with 404

Usage::

    from kennel.service import create_app

    app = create_app()
    app.run(port=5000)
"""

import logging

from kennel.app import App
from kennel.config import AppConfig
from kennel.http.request import Request
from kennel.middleware import JSONBody, RequestLogger
from kennel.resources import Resource, ResourceController
from kennel.server.errors import message_body
from kennel.store import Store

logger = logging.getLogger("kennel.server")

DOGS = Resource(singular="dog", plural="dogs", required=("name", "breed"))
HUBS = Resource(singular="hub", plural="hubs", required=("name",), patchable=True)

RESOURCES: tuple[Resource, ...] = (DOGS, HUBS)

# Example records loaded at startup when AppConfig.seed is set
SEED_RECORDS: dict[str, tuple[dict[str, str], ...]] = {
    "dogs": ({"name": "Bicho", "breed": "Maltese"},),
}

NOT_FOUND_MESSAGE = "Not found!"


def create_app(
    config: AppConfig | None = None,
    *,
    stores: dict[str, Store] | None = None,
) -> App:
    """Build the kennel App.

    Args:
        config: App configuration; defaults to ``AppConfig()``.
        stores: Optional stores keyed by resource plural (``"dogs"``),
            used instead of fresh ones. Seeding still applies.
    """
    config = config or AppConfig()
    app = App(config)

    app.add_middleware(RequestLogger())
    app.add_middleware(JSONBody(max_length=config.max_content_length))

    controllers: list[ResourceController] = []
    for resource in RESOURCES:
        controller = ResourceController(resource, (stores or {}).get(resource.plural))
        if config.seed:
            for fields in SEED_RECORDS.get(resource.plural, ()):
                controller.store.seed(fields)
        controller.mount(app)
        controllers.append(controller)

    # Answers whatever no route matched, for any method.
    @app.fallback()
    def not_found(request: Request) -> tuple[dict[str, str], int]:
        logger.debug("no route for %s %s", request.method, request.path)
        return message_body(NOT_FOUND_MESSAGE), 404

    @app.on_startup
    def announce() -> None:
        summary = ", ".join(f"{len(c.store)} {c.resource.plural}" for c in controllers)
        logger.info("kennel ready (%s)", summary)

    return app
