"""Ordered route table with first-match-wins dispatch.

Routes are tried in registration order, and the first one whose methods
and path pattern both accept the request handles it. A wildcard route
(``{name:path}``) therefore shadows everything registered after it.
The fallback lives outside the table and is tried only after every
route has failed, however early it was registered.
"""

import re
from dataclasses import dataclass

from kennel.errors import ConfigurationError, NotFound
from kennel.routing.route import PathSegment, Route, RouteMatch

_PARAM = re.compile(r"^\{(?P<name>\w+)(?::(?P<kind>\w+))?\}$")
_FOREIGN_PARAM = re.compile(r"^(<[^>]+>|:\w+)$")


def parse_path(path: str) -> list[PathSegment]:
    """Split a route path into segments.

    ``"/dogs/{id}"`` gives a literal ``dogs`` and an ``id`` capture;
    ``"/{rest:path}"`` gives a wildcard capture named ``rest``.

    Raises ``ConfigurationError`` for ``<param>`` or ``:param`` syntax,
    for any kind other than ``path``, and for a wildcard that is not the
    last segment.
    """
    parts = [part for part in path.strip("/").split("/") if part]
    segments: list[PathSegment] = []
    for position, part in enumerate(parts):
        if _FOREIGN_PARAM.match(part):
            msg = (
                f"Route {path!r} uses a <param> or :param segment ({part!r}). "
                "Kennel path parameters are written as {param}."
            )
            raise ConfigurationError(msg)
        found = _PARAM.match(part)
        if found is None:
            segments.append(PathSegment(part))
            continue
        kind = found["kind"]
        if kind not in (None, "path"):
            msg = f"Route {path!r} uses unknown parameter kind {kind!r}."
            raise ConfigurationError(msg)
        if kind == "path" and position != len(parts) - 1:
            msg = f"Route {path!r}: a {{name:path}} wildcard must be the last segment."
            raise ConfigurationError(msg)
        segments.append(PathSegment(part, param=found["name"], wildcard=kind == "path"))
    return segments


def compile_pattern(segments: list[PathSegment]) -> re.Pattern[str]:
    """Anchored regex for *segments*; a trailing slash is optional."""
    pieces: list[str] = []
    for seg in segments:
        if seg.wildcard:
            pieces.append(f"(?:/(?P<{seg.param}>.*))?")
        elif seg.param is not None:
            pieces.append(f"/(?P<{seg.param}>[^/]+)")
        else:
            pieces.append("/" + re.escape(seg.value))
    return re.compile("^" + "".join(pieces) + "/?$")


@dataclass(frozen=True, slots=True)
class _Entry:
    route: Route
    regex: re.Pattern[str]


class Router:
    """Usage::

        router = Router()
        router.add(Route("/dogs", list_dogs, frozenset({"GET"})))
        router.add(Route("/dogs/{id}", get_dog, frozenset({"GET"})))
        router.set_fallback(Route("/{path:path}", not_found, frozenset()))
        router.compile()
        match = router.match("GET", "/dogs/Xb3_k9Qa")
    """

    __slots__ = ("_compiled", "_fallback", "_table")

    def __init__(self) -> None:
        self._table: list[_Entry] = []
        self._fallback: Route | None = None
        self._compiled = False

    def add(self, route: Route) -> None:
        self._check_open()
        self._table.append(_Entry(route, compile_pattern(parse_path(route.path))))

    def set_fallback(self, route: Route) -> None:
        self._check_open()
        self._fallback = route

    def compile(self) -> None:
        """Close the table to further changes."""
        self._compiled = True

    @property
    def routes(self) -> list[Route]:
        """Every route in match order, fallback last."""
        result = [entry.route for entry in self._table]
        if self._fallback is not None:
            result.append(self._fallback)
        return result

    def match(self, method: str, path: str) -> RouteMatch:
        """Return the first route accepting *method* and *path*.

        Falls back to the fallback route with ``{"path": <path>}``, and
        raises ``NotFound`` when there is none.
        """
        for entry in self._table:
            if not entry.route.allows(method):
                continue
            found = entry.regex.match(path)
            if found is not None:
                params = {k: v for k, v in found.groupdict().items() if v is not None}
                return RouteMatch(entry.route, params)

        if self._fallback is not None:
            return RouteMatch(self._fallback, {"path": path.strip("/")})
        raise NotFound()

    def _check_open(self) -> None:
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
