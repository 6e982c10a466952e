"""Record stores and the user/product repository."""

import json
import threading

import pytest

from extensions import db
from models import Record, User
from repository import (
    CURRENT_USER_KEY,
    PRODUCTS_KEY,
    USERS_KEY,
    CorruptRecordError,
    MarketRepository,
    current_repository,
)
from storage import DatabaseRecordStore, MemoryRecordStore


def test_load_seeds_products_when_empty(repository) -> None:
    users, products = repository.load()
    assert users == []
    assert [p.id for p in products] == ["1", "2", "3", "4", "5"]
    assert all(p.status == "active" for p in products)
    # seeding is persisted straight away
    stored = json.loads(repository.store.get(PRODUCTS_KEY))
    assert [item["title"] for item in stored][0] == "Vintage Wooden Chair"
    assert json.loads(repository.store.get(USERS_KEY)) == []


def test_load_does_not_reseed_existing_products(repository, make_product) -> None:
    repository.save_products([make_product("7")])
    _, products = repository.load()
    assert [p.id for p in products] == ["7"]


def test_save_then_load_round_trip(repository, make_product) -> None:
    users = [User(id="1", name="Ann", email="ann@example.com", password="x", date_joined="2024-01-02T03:04:05.000Z")]
    products = [make_product("8", image="uploads/8_a.png"), make_product("9", status="sold")]
    repository.save(users, products)
    assert repository.load() == (users, products)


def test_stored_layout_uses_camel_case_keys(repository, make_product) -> None:
    repository.save_products([make_product("8")])
    stored = json.loads(repository.store.get(PRODUCTS_KEY))[0]
    assert set(stored) == {
        "id", "title", "description", "price", "category", "location",
        "image", "seller", "sellerEmail", "dateAdded", "status",
    }


def test_missing_status_defaults_to_active() -> None:
    store = MemoryRecordStore({PRODUCTS_KEY: json.dumps([{
        "id": "1", "title": "T", "description": "D", "price": 5, "category": "others",
        "location": "delhi", "seller": "S", "sellerEmail": "s@x.com",
        "dateAdded": "2024-01-01T00:00:00.000Z",
    }])})
    product = MarketRepository(store).load_products()[0]
    assert product.status == "active"
    assert product.image is None


@pytest.mark.parametrize("raw", ["{not json", json.dumps({"id": "1"}), json.dumps([{"id": "1"}])])
def test_corrupt_records_propagate(raw) -> None:
    repository = MarketRepository(MemoryRecordStore({USERS_KEY: raw}))
    with pytest.raises(CorruptRecordError) as excinfo:
        repository.load()
    assert excinfo.value.key == USERS_KEY


def _stored_product(**overrides):
    item = {
        "id": "1", "title": "T", "description": "D", "price": 5, "category": "others",
        "location": "delhi", "seller": "S", "sellerEmail": "s@x.com",
        "dateAdded": "2024-01-01T00:00:00.000Z",
    }
    item.update(overrides)
    return item


@pytest.mark.parametrize("overrides", [
    {"price": 12.9},
    {"price": "12"},
    {"price": -1},
    {"title": None},
    {"sellerEmail": None},
])
def test_mistyped_product_fields_are_corrupt(overrides) -> None:
    repository = MarketRepository(MemoryRecordStore({PRODUCTS_KEY: json.dumps([_stored_product(**overrides)])}))
    with pytest.raises(CorruptRecordError) as excinfo:
        repository.load_products()
    assert excinfo.value.key == PRODUCTS_KEY


def test_corrupt_products_fail_the_request(app, client) -> None:
    with app.app_context():
        DatabaseRecordStore().set(PRODUCTS_KEY, json.dumps([_stored_product(title=None)]))
    with pytest.raises(CorruptRecordError):
        client.get("/?q=x")


def test_concurrent_adds_are_all_kept(repository, make_product) -> None:
    workers = 20
    barrier = threading.Barrier(workers)

    def work(n):
        barrier.wait()
        repository.add_product(make_product(f"p{n}"))
        repository.add_user(User(id=f"u{n}", name=f"User {n}", email=f"user{n}@example.com"))

    threads = [threading.Thread(target=work, args=(n,)) for n in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(p.id for p in repository.load_products()) == sorted(f"p{n}" for n in range(workers))
    assert sorted(u.id for u in repository.load_users()) == sorted(f"u{n}" for n in range(workers))


def test_database_record_sets_updated_at(app) -> None:
    with app.app_context():
        DatabaseRecordStore().set("k", "one")
        record = db.session.get(Record, "k")
        assert record.updated_at is not None


def test_delete_product_by_id(repository, make_product) -> None:
    repository.save_products([make_product("1"), make_product("2"), make_product("3")])
    assert repository.delete_product("2") is True
    assert [p.id for p in repository.load_products()] == ["1", "3"]
    assert repository.delete_product("2") is False
    assert [p.id for p in repository.load_products()] == ["1", "3"]


def test_add_helpers_append(repository, make_product, alice) -> None:
    repository.add_user(alice)
    repository.add_product(make_product("11"))
    repository.add_product(make_product("12"))
    assert repository.load_users() == [alice]
    assert [p.id for p in repository.load_products()] == ["11", "12"]


def test_memory_store_delete() -> None:
    store = MemoryRecordStore({CURRENT_USER_KEY: "{}"})
    store.delete(CURRENT_USER_KEY)
    store.delete(CURRENT_USER_KEY)
    assert store.get(CURRENT_USER_KEY) is None


def test_database_store_round_trip(app) -> None:
    with app.app_context():
        store = DatabaseRecordStore()
        assert store.get("k") is None
        store.set("k", "one")
        store.set("k", "two")
        assert store.get("k") == "two"
        store.delete("k")
        assert store.get("k") is None


def test_app_repository_is_database_backed(app) -> None:
    with app.app_context():
        repository = current_repository()
        assert isinstance(repository.store, DatabaseRecordStore)
        _, products = repository.load()
        assert len(products) == 5
        assert repository.load_products() == products
