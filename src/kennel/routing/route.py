"""Route definitions and match results."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One ``/``-separated piece of a route path.

    ``dogs`` is literal; ``{id}`` captures one segment as ``id``;
    ``{rest:path}`` captures the remainder of the path as ``rest``.
    """

    value: str
    param: str | None = None
    wildcard: bool = False


@dataclass(frozen=True, slots=True)
class Route:
    """A handler bound to a path pattern and a set of methods.

    An empty ``methods`` set accepts every method.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None

    def allows(self, method: str) -> bool:
        return not self.methods or method in self.methods


@dataclass(frozen=True, slots=True)
class RouteMatch:
    route: Route
    path_params: dict[str, str]
