import pytest

from catalog.testing.context import ScenarioContext
from catalog.testing.storage import KeyNotFound, SharedStorage


def test_set_then_get():
    storage = SharedStorage()
    storage.set("product_variant_id", 7)
    assert storage.get("product_variant_id") == 7


def test_last_write_wins():
    storage = SharedStorage()
    storage.set("last_exception", "first")
    storage.set("last_exception", "second")
    assert storage.get("last_exception") == "second"
    assert len(storage) == 1


def test_get_unknown_key_raises():
    storage = SharedStorage()
    with pytest.raises(KeyNotFound):
        storage.get("missing")
    # still a KeyError for callers that only know the builtin
    with pytest.raises(KeyError):
        storage.get("missing")


def test_has_and_contains():
    storage = SharedStorage()
    storage.set("order", object())
    assert storage.has("order")
    assert "order" in storage
    assert not storage.has("product")


def test_latest_follows_last_set():
    storage = SharedStorage()
    storage.set("product", "mug")
    storage.set("variant", "blue mug")
    assert storage.get_latest() == "blue mug"
    storage.set("product", "t-shirt")
    assert storage.get_latest() == "t-shirt"


def test_latest_on_empty_storage_raises():
    with pytest.raises(KeyNotFound):
        SharedStorage().get_latest()


def test_clear_discards_everything():
    storage = SharedStorage()
    storage.set("a", 1)
    storage.set("b", 2)
    storage.clear()
    assert len(storage) == 0
    assert storage.keys() == []
    with pytest.raises(KeyNotFound):
        storage.get_latest()


def test_each_context_gets_its_own_storage(db_session):
    first = ScenarioContext(session=db_session, scenario="first")
    first.storage.set("product", "mug")

    second = ScenarioContext(session=db_session, scenario="second")
    assert not second.storage.has("product")
    assert first.storage is not second.storage
