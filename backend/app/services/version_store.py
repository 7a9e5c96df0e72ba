# app/services/version_store.py
# In-memory, process-local history of generated plans.
import itertools
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from uiplan.schema import Plan


@dataclass(frozen=True)
class VersionRecord:
    id: str
    plan: Plan
    code: str
    explanation: str
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "plan": self.plan.to_dict(),
            "code": self.code,
            "explanation": self.explanation,
            "timestamp": self.timestamp,
        }


class VersionStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._versions: List[VersionRecord] = []
        self._current_id: Optional[str] = None
        self._counter = itertools.count(1)

    def add(self, plan: Plan, code: str, explanation: str) -> str:
        with self._lock:
            record = VersionRecord(id=f"v{next(self._counter)}", plan=plan, code=code, explanation=explanation)
            self._versions.append(record)
            self._current_id = record.id
            return record.id

    def list(self) -> List[VersionRecord]:
        with self._lock:
            return list(self._versions)

    def get(self, version_id: str) -> Optional[VersionRecord]:
        with self._lock:
            return self._find(version_id)

    def current(self) -> Optional[VersionRecord]:
        with self._lock:
            return self._find(self._current_id) if self._current_id else None

    def set_current(self, version_id: str) -> bool:
        with self._lock:
            if self._find(version_id) is None:
                return False
            self._current_id = version_id
            return True

    def delete(self, version_id: str) -> bool:
        with self._lock:
            record = self._find(version_id)
            if record is None:
                return False
            self._versions.remove(record)
            if self._current_id == version_id:
                self._current_id = self._versions[-1].id if self._versions else None
            return True

    def clear(self) -> None:
        with self._lock:
            self._versions.clear()
            self._current_id = None

    def _find(self, version_id: str) -> Optional[VersionRecord]:
        for record in self._versions:
            if record.id == version_id:
                return record
        return None


_store: Optional[VersionStore] = None


def get_version_store() -> VersionStore:
    global _store
    if _store is None:
        _store = VersionStore()
    return _store


def reset_version_store() -> None:
    global _store
    _store = None
