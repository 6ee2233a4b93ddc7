"""Tests for kennel.store — in-memory record store."""

import threading
from collections.abc import Iterator

import pytest

from kennel.errors import ValidationError
from kennel.store import Record, Store


def _dogs() -> Store:
    return Store("dog", required=("name", "breed"))


def _sequence(*ids: str) -> Iterator[str]:
    return iter(ids)


class TestRecord:
    def test_to_dict_puts_id_first(self) -> None:
        record = Record(id="abc", fields={"name": "Rex", "breed": "Lab"})
        assert list(record.to_dict()) == ["id", "name", "breed"]
        assert record.to_dict() == {"id": "abc", "name": "Rex", "breed": "Lab"}

    def test_drops_client_id(self) -> None:
        record = Record(id="abc", fields={"id": "forged", "name": "Rex"})
        assert record.to_dict() == {"id": "abc", "name": "Rex"}

    def test_fields_read_only(self) -> None:
        record = Record(id="abc", fields={"name": "Rex"})
        with pytest.raises(TypeError):
            record.fields["name"] = "Max"  # type: ignore[index]

    def test_fields_copied(self) -> None:
        source = {"name": "Rex"}
        record = Record(id="abc", fields=source)
        source["name"] = "Max"
        assert record.fields["name"] == "Rex"

    def test_frozen(self) -> None:
        record = Record(id="abc")
        with pytest.raises(AttributeError):
            record.id = "xyz"  # type: ignore[misc]


class TestStoreCreate:
    def test_assigns_id(self) -> None:
        store = _dogs()
        record = store.create({"name": "Rex", "breed": "Lab"})

        assert record.id
        assert record.fields == {"name": "Rex", "breed": "Lab"}

    def test_get_after_create(self) -> None:
        store = _dogs()
        record = store.create({"name": "Rex", "breed": "Lab"})

        found = store.get(record.id)
        assert found is not None
        assert found.fields == {"name": "Rex", "breed": "Lab"}

    def test_missing_required_field(self) -> None:
        store = _dogs()
        with pytest.raises(ValidationError) as exc_info:
            store.create({"name": "Rex"})

        assert exc_info.value.missing == ("breed",)
        assert len(store) == 0

    @pytest.mark.parametrize("blank", ["", None])
    def test_blank_required_field(self, blank: object) -> None:
        store = _dogs()
        with pytest.raises(ValidationError):
            store.create({"name": blank, "breed": "Lab"})
        assert len(store) == 0

    def test_client_id_ignored(self) -> None:
        store = Store("dog", id_factory=_sequence("real").__next__)
        record = store.create({"id": "forged", "name": "Rex"})

        assert record.id == "real"
        assert "id" not in record.fields
        assert store.get("forged") is None

    def test_ids_unique(self) -> None:
        store = _dogs()
        ids = {store.create({"name": f"dog{i}", "breed": "Lab"}).id for i in range(100)}
        assert len(ids) == 100

    def test_id_collision_redraws(self) -> None:
        store = Store("dog", id_factory=_sequence("a", "a", "b").__next__)
        first = store.create({"name": "Rex"})
        second = store.create({"name": "Max"})

        assert first.id == "a"
        assert second.id == "b"

    def test_no_required_fields(self) -> None:
        store = Store("hub")
        record = store.create({})
        assert record.fields == {}


class TestStoreRead:
    def test_list_insertion_order(self) -> None:
        store = _dogs()
        names = ["Rex", "Max", "Bo"]
        for name in names:
            store.create({"name": name, "breed": "Lab"})

        assert [r.fields["name"] for r in store.list()] == names

    def test_list_is_snapshot(self) -> None:
        store = _dogs()
        store.create({"name": "Rex", "breed": "Lab"})
        snapshot = store.list()
        store.create({"name": "Max", "breed": "Pug"})

        assert len(snapshot) == 1
        assert len(store) == 2

    def test_get_missing(self) -> None:
        assert _dogs().get("doesNotExist") is None

    def test_empty_store_is_falsy(self) -> None:
        assert not _dogs()

    def test_repr(self) -> None:
        assert repr(_dogs()) == "Store('dog', records=0)"


class TestStoreReplace:
    def test_discards_prior_fields(self) -> None:
        store = _dogs()
        rex = store.create({"name": "Rex", "breed": "Lab"})

        replaced = store.replace(rex.id, {"name": "Max"})
        assert replaced is not None
        assert replaced.id == rex.id
        assert replaced.fields == {"name": "Max"}
        assert store.get(rex.id) == replaced

    def test_not_validated(self) -> None:
        store = _dogs()
        rex = store.create({"name": "Rex", "breed": "Lab"})

        replaced = store.replace(rex.id, {})
        assert replaced is not None
        assert replaced.fields == {}

    def test_keeps_id_and_position(self) -> None:
        store = _dogs()
        first = store.create({"name": "Rex", "breed": "Lab"})
        store.create({"name": "Bo", "breed": "Pug"})

        store.replace(first.id, {"id": "other", "name": "Max"})
        assert [r.id for r in store.list()][0] == first.id

    def test_missing(self) -> None:
        assert _dogs().replace("nope", {"name": "Max"}) is None

    def test_held_record_unchanged(self) -> None:
        store = _dogs()
        rex = store.create({"name": "Rex", "breed": "Lab"})
        store.replace(rex.id, {"name": "Max"})

        assert rex.fields == {"name": "Rex", "breed": "Lab"}


class TestStorePatch:
    def test_preserves_unnamed_fields(self) -> None:
        store = Store("hub", required=("name",))
        hub = store.create({"name": "North", "city": "Oslo"})

        patched = store.patch(hub.id, {"city": "Bergen"})
        assert patched is not None
        assert patched.fields == {"name": "North", "city": "Bergen"}
        assert store.get(hub.id) == patched

    def test_adds_new_fields(self) -> None:
        store = Store("hub")
        hub = store.create({"name": "North"})

        patched = store.patch(hub.id, {"open": True})
        assert patched is not None
        assert patched.fields == {"name": "North", "open": True}

    def test_cannot_change_id(self) -> None:
        store = Store("hub")
        hub = store.create({"name": "North"})

        patched = store.patch(hub.id, {"id": "other"})
        assert patched is not None
        assert patched.id == hub.id
        assert store.get("other") is None

    def test_missing(self) -> None:
        assert Store("hub").patch("nope", {"name": "x"}) is None


class TestStoreDelete:
    def test_returns_removed(self) -> None:
        store = _dogs()
        rex = store.create({"name": "Rex", "breed": "Lab"})

        assert store.delete(rex.id) == rex
        assert store.get(rex.id) is None

    def test_twice(self) -> None:
        store = _dogs()
        rex = store.create({"name": "Rex", "breed": "Lab"})

        assert store.delete(rex.id) is not None
        assert store.delete(rex.id) is None

    def test_count_after_creates_and_deletes(self) -> None:
        store = _dogs()
        created = [store.create({"name": f"dog{i}", "breed": "Lab"}) for i in range(5)]
        for record in created[:2]:
            store.delete(record.id)

        assert len(store) == 3


class TestStoreSeed:
    def test_seed_skips_validation(self) -> None:
        store = _dogs()
        record = store.seed({"name": "Bicho"})

        assert record.id
        assert store.get(record.id) == record


class TestStoreThreadSafety:
    def test_concurrent_creates(self) -> None:
        store = _dogs()
        per_thread = 200

        def worker() -> None:
            for i in range(per_thread):
                store.create({"name": f"dog{i}", "breed": "Lab"})

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        records = store.list()
        assert len(records) == 8 * per_thread
        assert len({r.id for r in records}) == len(records)
