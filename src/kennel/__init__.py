"""Kennel — a small JSON REST API over in-memory resource stores.

Serves ``/dogs`` and ``/hubs`` with list, get, create, replace, patch and
delete, on a minimal ASGI application layer.

Basic usage::

    from kennel.service import create_app

    app = create_app()
    app.run(port=5000)

Or from the shell::

    kennel run --port 5000
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "HTTPError",
    "KennelError",
    "Middleware",
    "Next",
    "NotFound",
    "Record",
    "Request",
    "Response",
    "Store",
    "ValidationError",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import kennel`` fast while providing a clean top-level API.
    """
    if name == "App":
        from kennel.app import App

        return App

    if name == "AppConfig":
        from kennel.config import AppConfig

        return AppConfig

    if name == "Request":
        from kennel.http.request import Request

        return Request

    if name == "Response":
        from kennel.http.response import Response

        return Response

    if name in ("Middleware", "Next"):
        from kennel.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("Record", "Store"):
        from kennel import store as _store

        return getattr(_store, name)

    if name == "create_app":
        from kennel.service import create_app

        return create_app

    if name in (
        "BadRequest",
        "ConfigurationError",
        "HTTPError",
        "KennelError",
        "NotFound",
        "ValidationError",
    ):
        from kennel import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
