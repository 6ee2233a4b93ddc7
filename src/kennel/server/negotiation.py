"""Content negotiation — maps return values to Response objects.

Inspects the return value from a route handler and produces the
appropriate Response. isinstance-based dispatch, no magic, fully
predictable.
"""

from typing import Any

from kennel.http.response import Response
from kennel.store import Record


def negotiate(value: Any) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``               -> pass through
    2. ``Record``                 -> 200, application/json
    3. ``dict`` / ``list``        -> 200, application/json (records inside
                                     lists are serialized too)
    4. ``str``                    -> 200, text/plain
    5. ``(value, int)``           -> negotiate value, override status
    6. ``(value, int, dict)``     -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case Record():
            return Response.from_json(value.to_dict())
        case list():
            return Response.from_json(
                [item.to_dict() if isinstance(item, Record) else item for item in value]
            )
        case dict():
            return Response.from_json(value)
        case str():
            return Response(body=value)
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return dict, list, Record, str, Response, or (value, status)."
            )
            raise TypeError(msg)
