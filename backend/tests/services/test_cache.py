# tests/services/test_cache.py
from datetime import datetime, timedelta, timezone

import pydantic
import pytest

from wikihub.models import Project
from wikihub.schemas.project import ProjectSnapshot
from wikihub.services.cache import MemoryCacheStore, ProjectCache


def test_store_expires_entries():
    store = MemoryCacheStore()
    now = datetime.now(timezone.utc)

    store.put("fresh", 1, now + timedelta(hours=1))
    store.put("stale", 2, now - timedelta(seconds=1))

    assert store.get("fresh") == 1
    assert store.get("stale") is None
    assert store.get("missing") is None

def test_store_forget_and_clear():
    store = MemoryCacheStore()
    expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
    store.put("a", 1, expires_at)
    store.put("b", 2, expires_at)

    store.forget("a")
    assert store.get("a") is None
    store.clear()
    assert store.get("b") is None

def test_get_loads_and_caches_snapshot(db_session, sample_project):
    cache = ProjectCache()

    snapshot = cache.get(db_session, sample_project.id)

    assert isinstance(snapshot, ProjectSnapshot)
    assert snapshot.name == sample_project.name
    assert cache.store.get(cache.key_for(sample_project.id)) == snapshot

def test_hit_does_not_reload(db_session, sample_project, monkeypatch):
    cache = ProjectCache()
    cache.get(db_session, sample_project.id)

    def no_load(*args, **kwargs):
        raise AssertionError("cache hit should not query the database")

    monkeypatch.setattr(db_session, "get", no_load)

    assert cache.get(db_session, sample_project.id).id == sample_project.id

def test_force_refresh_reloads(db_session, sample_project):
    cache = ProjectCache()
    cache.get(db_session, sample_project.id)

    sample_project.name = "Renamed"
    db_session.commit()

    assert cache.get(db_session, sample_project.id).name == "Test Project"
    assert cache.get(db_session, sample_project.id, force_refresh=True).name == "Renamed"
    assert cache.get(db_session, sample_project.id).name == "Renamed"

def test_absent_project_not_cached(db_session, members):
    cache = ProjectCache()

    assert cache.get(db_session, 4242) is None
    assert cache.store.get(cache.key_for(4242)) is None

    db_session.add(Project(id=4242, name="Late", open_state=1, creator_id=members[0].id))
    db_session.commit()

    assert cache.get(db_session, 4242).name == "Late"

def test_empty_id_returns_none(db_session):
    cache = ProjectCache()

    assert cache.get(db_session, None) is None
    assert cache.get(db_session, 0) is None

def test_entries_use_configured_ttl(db_session, sample_project, monkeypatch):
    store = MemoryCacheStore()
    recorded = {}
    original_put = store.put

    def recording_put(key, value, expires_at):
        recorded["expires_at"] = expires_at
        original_put(key, value, expires_at)

    monkeypatch.setattr(store, "put", recording_put)
    cache = ProjectCache(store=store, ttl=timedelta(hours=12))

    before = datetime.now(timezone.utc)
    cache.get(db_session, sample_project.id)

    assert timedelta(hours=11, minutes=59) < recorded["expires_at"] - before <= timedelta(hours=12, seconds=5)

def test_invalidate(db_session, sample_project):
    cache = ProjectCache()
    cache.get(db_session, sample_project.id)

    cache.invalidate(sample_project.id)
    cache.invalidate(None)

    assert cache.store.get(cache.key_for(sample_project.id)) is None

def test_zero_ttl_is_respected(db_session, sample_project):
    cache = ProjectCache(ttl=timedelta(0))

    assert cache.ttl == timedelta(0)
    assert cache.get(db_session, sample_project.id).id == sample_project.id
    assert cache.store.get(cache.key_for(sample_project.id)) is None

def test_explicit_store_is_used():
    store = MemoryCacheStore()

    assert ProjectCache(store=store).store is store

def test_cached_snapshot_is_read_only(db_session, sample_project):
    cache = ProjectCache()
    snapshot = cache.get(db_session, sample_project.id)

    with pytest.raises(pydantic.ValidationError):
        snapshot.open_state = 1

    assert cache.get(db_session, sample_project.id).open_state == 0
