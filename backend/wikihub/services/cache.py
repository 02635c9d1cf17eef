# backend/wikihub/services/cache.py
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.orm import Session

from ..config import settings
from ..models import Project
from ..schemas.project import ProjectSnapshot
from ..utils.logging import service_logger


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryCacheStore:
    """In-process key/value store with absolute expiry times"""

    def __init__(self):
        self._entries: Dict[str, Tuple[Any, datetime]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if expires_at <= _now():
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: Any, expires_at: datetime) -> None:
        with self._lock:
            self._entries[key] = (value, expires_at)

    def forget(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class ProjectCache:
    """Read-through cache of project metadata.

    Entries are disposable snapshots of project rows. Every write path must call
    ``invalidate`` once its transaction commits, otherwise visibility and password
    checks keep reading the old values until the entry expires.
    """

    key_prefix = "project.id."

    def __init__(self, store: Optional[MemoryCacheStore] = None, ttl: Optional[timedelta] = None):
        self.store = store if store is not None else MemoryCacheStore()
        self.ttl = ttl if ttl is not None else timedelta(hours=settings.PROJECT_CACHE_TTL_HOURS)

    def key_for(self, project_id: int) -> str:
        return f"{self.key_prefix}{project_id}"

    def get(self, db: Session, project_id: Optional[int], force_refresh: bool = False) -> Optional[ProjectSnapshot]:
        if not project_id:
            return None

        key = self.key_for(project_id)
        if not force_refresh:
            cached = self.store.get(key)
            if cached is not None:
                return cached

        project = db.get(Project, project_id)
        if project is None:
            service_logger.debug("Project not found for cache load", extra={"project_id": project_id})
            return None

        snapshot = ProjectSnapshot.model_validate(project)
        self.store.put(key, snapshot, _now() + self.ttl)
        service_logger.debug("Cached project metadata", extra={
            "project_id": project_id,
            "forced": force_refresh
        })
        return snapshot

    def invalidate(self, project_id: Optional[int]) -> None:
        if not project_id:
            return
        self.store.forget(self.key_for(project_id))

    def clear(self) -> None:
        self.store.clear()


project_cache = ProjectCache()
