import pytest

from wastewise_api.app.core.store import ENTITY_KINDS, EntityStore


def build(record_id):
    return {"id": record_id}


def test_ids_start_at_one_and_increase_per_kind():
    store = EntityStore()
    assert [store.create("items", build)["id"] for _ in range(3)] == [1, 2, 3]
    assert store.create("users", build)["id"] == 1
    assert store.create("items", build)["id"] == 4
    assert store.get("items", 4) == {"id": 4}


def test_ids_are_not_reused_after_delete():
    store = EntityStore()
    first = store.create("items", build)["id"]
    assert store.delete("items", first) is True
    assert store.create("items", build)["id"] == first + 1


def test_failed_build_does_not_consume_an_id():
    store = EntityStore()

    def broken(record_id):
        raise ValueError("bad record")

    with pytest.raises(ValueError):
        store.create("events", broken)
    assert store.count("events") == 0
    assert store.create("events", build)["id"] == 1


def test_put_get_delete_and_all_in_insertion_order():
    store = EntityStore()
    store.put("events", 2, "b")
    store.put("events", 1, "a")
    store.put("events", 3, "c")
    assert store.get("events", 1) == "a"
    assert store.get("events", 99) is None
    assert store.all("events") == ["b", "a", "c"]
    assert store.delete("events", 1) is True
    assert store.delete("events", 1) is False
    assert store.all("events") == ["b", "c"]
    assert store.count("events") == 2


def test_unknown_kind_raises_key_error():
    store = EntityStore()
    with pytest.raises(KeyError):
        store.get("widgets", 1)
    with pytest.raises(KeyError):
        store.create("widgets", build)
    with pytest.raises(KeyError):
        store.lock("widgets")


def test_every_kind_has_its_own_lock():
    store = EntityStore()
    assert sorted(store.kinds) == sorted(ENTITY_KINDS)
    assert store.lock("users") is store.lock("users")
    assert store.lock("users") is not store.lock("chats")
