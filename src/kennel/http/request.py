"""The incoming HTTP request.

Everything known when the request arrives is frozen; the body is read
from the ASGI channel on demand and cached.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncIterator
from dataclasses import dataclass, field, replace
from typing import Any

from kennel._internal.asgi import Receive
from kennel.errors import PayloadTooLarge
from kennel.http.headers import Headers

_UNPARSED = object()


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


@dataclass(frozen=True, slots=True)
class Request:
    """An HTTP request as handlers see it.

    ``data`` is the JSON body once ``json()`` has run (the ``JSONBody``
    middleware runs it before routing), else ``None``.
    """

    method: str
    path: str
    headers: Headers
    path_params: dict[str, str]

    _receive: Receive
    # Holds the raw and parsed body; shared by copies from with_path_params()
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def is_json(self) -> bool:
        """``application/json`` or any ``+json`` media type."""
        media = (self.content_type or "").split(";", 1)[0].strip().lower()
        return media == "application/json" or media.endswith("+json")

    @property
    def content_length(self) -> int | None:
        """Declared Content-Length, or ``None`` if absent or unparsable."""
        try:
            return int(self.headers["content-length"])
        except (KeyError, ValueError):
            return None

    @property
    def data(self) -> Any:
        value = self._cache.get("json", _UNPARSED)
        return None if value is _UNPARSED else value

    async def stream(self, limit: int | None = None) -> AsyncIterator[bytes]:
        """Yield body chunks as they arrive.

        Raises ``PayloadTooLarge`` as soon as more than *limit* bytes
        have been received, without waiting for the rest.
        """
        received = 0
        while True:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                return
            chunk = message.get("body", b"")
            if chunk:
                received += len(chunk)
                if limit is not None and received > limit:
                    raise PayloadTooLarge(limit)
                yield chunk
            if not message.get("more_body", False):
                return

    async def body(self, limit: int | None = None) -> bytes:
        """The whole body, read once and cached. See ``stream`` for *limit*."""
        if "body" not in self._cache:
            self._cache["body"] = b"".join([chunk async for chunk in self.stream(limit)])
        return self._cache["body"]

    async def json(self) -> Any:
        """Parse the body as strict JSON (cached); an empty body is ``None``.

        Raises ``ValueError`` for malformed JSON, invalid UTF-8, and the
        non-standard ``NaN``/``Infinity`` tokens.
        """
        value = self._cache.get("json", _UNPARSED)
        if value is _UNPARSED:
            raw = await self.body()
            value = json_module.loads(raw, parse_constant=_reject_constant) if raw else None
            self._cache["json"] = value
        return value

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        return replace(self, path_params=path_params)

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            path_params={},
            _receive=receive,
        )
