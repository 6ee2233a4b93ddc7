"""In-memory record store.

One ``Store`` holds the records of one resource kind for the lifetime of
the process. Records are immutable values; every mutation builds a new
``Record`` and writes it back at the same index, so a caller holding a
record can never observe (or cause) a change to stored state.

Thread safety:
    Every operation runs under a single ``threading.Lock``. Mutations are
    serialised, and readers see either the state before or after a
    mutation, never a half-applied one.
"""

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from kennel.errors import ValidationError
from kennel.ids import generate

logger = logging.getLogger("kennel.store")


@dataclass(frozen=True, slots=True)
class Record:
    """A stored resource: an immutable ``id`` plus client-supplied fields."""

    id: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze a private copy; "id" is never a field.
        data = {k: v for k, v in self.fields.items() if k != "id"}
        object.__setattr__(self, "fields", MappingProxyType(data))

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation with ``id`` first."""
        return {"id": self.id, **self.fields}


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


class Store:
    """Ordered, lock-guarded collection of ``Record`` values.

    Lookups are linear scans by id; insertion order is listing order.

    Usage::

        dogs = Store("dog", required=("name", "breed"))
        rex = dogs.create({"name": "Rex", "breed": "Lab"})
        dogs.patch(rex.id, {"breed": "Labrador"})
    """

    __slots__ = ("_id_factory", "_lock", "_records", "name", "required")

    def __init__(
        self,
        name: str,
        *,
        required: tuple[str, ...] = (),
        id_factory: Callable[[], str] = generate,
    ) -> None:
        self.name = name
        self.required = required
        self._id_factory = id_factory
        self._records: list[Record] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __repr__(self) -> str:
        return f"Store({self.name!r}, records={len(self)})"

    # -- Reads --

    def list(self) -> Sequence[Record]:
        """Return a snapshot of all records in insertion order."""
        with self._lock:
            return list(self._records)

    def get(self, record_id: str) -> Record | None:
        """Return the record with *record_id*, or ``None``."""
        with self._lock:
            index = self._index_of(record_id)
            return None if index is None else self._records[index]

    # -- Writes --

    def create(self, fields: Mapping[str, Any]) -> Record:
        """Validate *fields*, assign a fresh id, and append a new record.

        Raises ``ValidationError`` (nothing stored) when any required
        field is missing or empty.
        """
        missing = tuple(name for name in self.required if _is_blank(fields.get(name)))
        if missing:
            raise ValidationError(missing)
        with self._lock:
            record = Record(id=self._new_id(), fields=fields)
            self._records.append(record)
        logger.debug("created %s %s", self.name, record.id)
        return record

    def seed(self, fields: Mapping[str, Any]) -> Record:
        """Append an example record without validation (startup only)."""
        with self._lock:
            record = Record(id=self._new_id(), fields=fields)
            self._records.append(record)
        return record

    def replace(self, record_id: str, fields: Mapping[str, Any]) -> Record | None:
        """Overwrite the record entirely with *fields*, keeping its id.

        No merge and no validation. Returns ``None`` if the id is absent.
        """
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            record = Record(id=record_id, fields=fields)
            self._records[index] = record
        logger.debug("replaced %s %s", self.name, record_id)
        return record

    def patch(self, record_id: str, changes: Mapping[str, Any]) -> Record | None:
        """Merge *changes* into the record; unnamed fields are kept.

        Returns ``None`` if the id is absent.
        """
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            current = self._records[index]
            record = Record(id=record_id, fields={**current.fields, **changes})
            self._records[index] = record
        logger.debug("patched %s %s", self.name, record_id)
        return record

    def delete(self, record_id: str) -> Record | None:
        """Remove the record and return it, or ``None`` if absent."""
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            record = self._records.pop(index)
        logger.debug("deleted %s %s", self.name, record_id)
        return record

    # -- Internal (caller holds the lock) --

    def _index_of(self, record_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _new_id(self) -> str:
        record_id = self._id_factory()
        while self._index_of(record_id) is not None:
            record_id = self._id_factory()
        return record_id
