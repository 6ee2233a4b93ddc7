"""CRUD route handlers for one resource kind.

A ``ResourceController`` owns a ``Store`` and mounts one handler per
verb onto an ``App``::

    GET    /dogs        list
    GET    /dogs/{id}   get
    POST   /dogs        create
    PUT    /dogs/{id}   replace
    PATCH  /dogs/{id}   patch (only when the resource allows it)
    DELETE /dogs/{id}   delete

Handlers translate store outcomes into ``(body, status)`` pairs at the
point of detection. Every error body is ``{"message": ...}``.
"""

from dataclasses import dataclass
from typing import Any

from kennel.app import App
from kennel.errors import BadRequest, ValidationError
from kennel.http.request import Request
from kennel.server.errors import message_body
from kennel.store import Record, Store


@dataclass(frozen=True, slots=True)
class Resource:
    """Static description of a resource kind.

    ``singular`` is used in messages (``"No dog with id ..."``),
    ``plural`` in paths (``/dogs``).
    """

    singular: str
    plural: str
    required: tuple[str, ...] = ()
    patchable: bool = False

    @property
    def collection_path(self) -> str:
        return f"/{self.plural}"

    @property
    def item_path(self) -> str:
        return f"/{self.plural}/{{id}}"


def required_message(required: tuple[str, ...]) -> str:
    """Human message naming every required field.

    ``("name", "breed")`` -> ``"Name and breed are required"``
    ``("name",)``         -> ``"Name is required"``
    """
    if not required:
        return "Required fields are missing"
    if len(required) == 1:
        listed = required[0]
    else:
        listed = f"{', '.join(required[:-1])} and {required[-1]}"
    verb = "is" if len(required) == 1 else "are"
    return f"{listed[:1].upper()}{listed[1:]} {verb} required"


def _body_fields(request: Request) -> dict[str, Any]:
    data = request.data
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


class ResourceController:
    """Request handlers for one ``Resource`` backed by one ``Store``."""

    __slots__ = ("resource", "store")

    def __init__(self, resource: Resource, store: Store | None = None) -> None:
        self.resource = resource
        if store is None:
            store = Store(resource.singular, required=resource.required)
        self.store = store

    def _not_found(self, record_id: str) -> tuple[dict[str, str], int]:
        return message_body(f"No {self.resource.singular} with id {record_id}"), 404

    # -- Handlers --

    def list_records(self) -> list[Record]:
        return self.store.list()

    def get_record(self, request: Request) -> Record | tuple[dict[str, str], int]:
        record_id = request.path_params["id"]
        record = self.store.get(record_id)
        if record is None:
            return self._not_found(record_id)
        return record

    def create_record(self, request: Request) -> tuple[Record | dict[str, str], int]:
        try:
            record = self.store.create(_body_fields(request))
        except ValidationError:
            return message_body(required_message(self.resource.required)), 400
        return record, 201

    def replace_record(self, request: Request) -> Record | tuple[dict[str, str], int]:
        record_id = request.path_params["id"]
        record = self.store.replace(record_id, _body_fields(request))
        if record is None:
            return self._not_found(record_id)
        return record

    def patch_record(self, request: Request) -> Record | tuple[dict[str, str], int]:
        record_id = request.path_params["id"]
        record = self.store.patch(record_id, _body_fields(request))
        if record is None:
            return self._not_found(record_id)
        return record

    def delete_record(self, request: Request) -> dict[str, str] | tuple[dict[str, str], int]:
        record_id = request.path_params["id"]
        if self.store.delete(record_id) is None:
            return self._not_found(record_id)
        singular = self.resource.singular
        return message_body(f"{singular[:1].upper()}{singular[1:]} with id {record_id} deleted")

    # -- Registration --

    def mount(self, app: App) -> None:
        """Register this resource's routes on *app*, in match order."""
        res = self.resource
        app.route(res.collection_path, name=f"list_{res.plural}")(self.list_records)
        app.route(res.item_path, name=f"get_{res.singular}")(self.get_record)
        app.route(res.collection_path, methods=["POST"], name=f"create_{res.singular}")(
            self.create_record
        )
        app.route(res.item_path, methods=["PUT"], name=f"replace_{res.singular}")(
            self.replace_record
        )
        if res.patchable:
            app.route(res.item_path, methods=["PATCH"], name=f"patch_{res.singular}")(
                self.patch_record
            )
        app.route(res.item_path, methods=["DELETE"], name=f"delete_{res.singular}")(
            self.delete_record
        )
