from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from conftest import VALID_PAYLOAD, make_settings
from portfolio_api.database.contact_store import (
    InMemoryContactStore,
    PersistenceError,
    SqlContactStore,
    build_contact_store,
)
from portfolio_api.database.database import build_engine, build_session_factory
from portfolio_api.schemas.contacts import ContactCreate


def _contact(**overrides) -> ContactCreate:
    return ContactCreate.model_validate(dict(VALID_PAYLOAD, **overrides))


@pytest.fixture
def sql_store() -> SqlContactStore:
    store = build_contact_store(make_settings(CONTACT_STORE_BACKEND="database", DATABASE_URL="sqlite://"))
    assert isinstance(store, SqlContactStore)
    return store


def test_memory_store_is_default():
    assert isinstance(build_contact_store(make_settings()), InMemoryContactStore)


def test_memory_store_assigns_id_and_timestamp():
    store = InMemoryContactStore()
    before = datetime.now(timezone.utc)

    record = store.create(_contact())

    assert record.id
    assert record.created_at >= before
    assert record.name == "Jane Doe"


def test_memory_store_lists_in_insertion_order():
    store = InMemoryContactStore()
    names = ["Alice", "Bob", "Carol"]
    for name in names:
        store.create(_contact(name=name))

    assert [r.name for r in store.list_all()] == names


def test_memory_store_listing_is_a_copy():
    store = InMemoryContactStore()
    store.create(_contact())

    store.list_all().clear()

    assert len(store.list_all()) == 1


def test_memory_store_concurrent_creates_get_unique_ids():
    store = InMemoryContactStore()
    data = _contact()

    with ThreadPoolExecutor(max_workers=8) as pool:
        records = list(pool.map(lambda _: store.create(data), range(200)))

    assert len({r.id for r in records}) == 200
    assert len(store.list_all()) == 200


def test_sql_store_create_and_list(sql_store):
    first = sql_store.create(_contact(name="Alice"))
    second = sql_store.create(_contact(name="Bob"))

    records = sql_store.list_all()

    assert first.id != second.id
    assert len(records) == 2
    assert {r.name for r in records} == {"Alice", "Bob"}
    assert {r.id for r in records} == {first.id, second.id}
    assert all(r.created_at is not None for r in records)


def test_sql_store_same_payload_twice(sql_store):
    data = _contact()
    sql_store.create(data)
    sql_store.create(data)

    assert len(sql_store.list_all()) == 2


def test_sql_store_wraps_database_errors():
    # no tables created
    engine = build_engine("sqlite://")
    store = SqlContactStore(build_session_factory(engine))

    with pytest.raises(PersistenceError):
        store.create(_contact())
    with pytest.raises(PersistenceError):
        store.list_all()


def test_sql_store_created_at_round_trips_in_utc(sql_store):
    before = datetime.now(timezone.utc)

    created = sql_store.create(_contact())
    [listed] = sql_store.list_all()

    assert created.created_at.tzinfo is not None
    assert listed.created_at.tzinfo is not None
    assert listed.created_at.utcoffset().total_seconds() == 0
    assert listed.created_at == created.created_at
    assert listed.created_at >= before
