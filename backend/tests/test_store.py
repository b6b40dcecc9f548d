from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from linkshort.core.exceptions import Conflict, DuplicateCode, StorageError
from linkshort.database import Base, build_engine
from linkshort.services.store import LinkStore


def test_create_sets_defaults(store):
    link = store.create("abc123", "https://example.com/page")

    assert link.code == "abc123"
    assert link.long_url == "https://example.com/page"
    assert link.clicks == 0
    assert link.last_clicked is None
    assert link.created_at is not None


def test_create_duplicate_code_is_rejected_by_unique_index(store):
    store.create("abc123", "https://example.com/one")

    with pytest.raises(DuplicateCode):
        store.create("abc123", "https://example.com/two")

    # DuplicateCode is reported to callers as a conflict
    assert issubclass(DuplicateCode, Conflict)
    # The session is still usable and the first row is untouched
    assert store.get_by_code("abc123").long_url == "https://example.com/one"


def test_get_by_code_missing(store):
    assert store.get_by_code("nothere") is None


def test_list_all_newest_first(store):
    for code in ("first1", "second", "third3"):
        store.create(code, f"https://example.com/{code}")

    assert [link.code for link in store.list_all()] == ["third3", "second", "first1"]


def test_list_all_empty(store):
    assert store.list_all() == []


def test_delete_by_code(store):
    store.create("abc123", "https://example.com")

    assert store.delete_by_code("abc123") is True
    assert store.get_by_code("abc123") is None
    assert store.delete_by_code("abc123") is False


def test_increment_clicks(store):
    store.create("abc123", "https://example.com")

    store.increment_clicks("abc123")
    store.increment_clicks("abc123")

    link = store.get_by_code("abc123")
    assert link.clicks == 2
    assert link.last_clicked is not None


def test_increment_clicks_unknown_code_is_noop(store):
    store.create("abc123", "https://example.com")

    store.increment_clicks("other1")

    assert store.get_by_code("abc123").clicks == 0


def test_reads_are_not_cached(store, engine):
    store.create("abc123", "https://example.com")
    assert store.get_by_code("abc123").clicks == 0

    # Another connection updates the row behind this session's back
    with engine.begin() as conn:
        conn.exec_driver_sql("UPDATE links SET clicks = 7 WHERE code = 'abc123'")

    assert store.get_by_code("abc123").clicks == 7


def test_storage_failure_becomes_storage_error(store, db, monkeypatch):
    store.create("abc123", "https://example.com")

    def broken_commit():
        raise OperationalError("UPDATE links", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", broken_commit)

    with pytest.raises(StorageError):
        store.increment_clicks("abc123")
    with pytest.raises(StorageError):
        store.delete_by_code("abc123")
    with pytest.raises(StorageError):
        store.create("new123", "https://example.com")


def test_concurrent_increments_are_not_lost(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'clicks.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    setup = Session()
    LinkStore(setup).create("abc123", "https://example.com")
    setup.close()

    def click():
        session = Session()
        try:
            LinkStore(session).increment_clicks("abc123")
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=8) as pool:
        for future in [pool.submit(click) for _ in range(40)]:
            future.result()

    check = Session()
    try:
        assert LinkStore(check).get_by_code("abc123").clicks == 40
    finally:
        check.close()
        engine.dispose()
