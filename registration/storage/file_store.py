# registration/storage/file_store.py
"""
File backend.

Layout under DATA_DIR:

    counters.json           {"riyadh": 12, "eastern": 3, ...}
    riyadh/ر1.json          one file per submission
    riyadh/ر2.json
    eastern/ش1.json

counters.json is read, modified and written back as a whole on every
increment, so all increments share one process-wide lock. The blocking
file I/O runs in worker threads to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from registration.core.errors import StorageError
from registration.db.models.submission import Submission
from registration.storage.base import CounterStore, SubmissionStore

COUNTERS_FILENAME = "counters.json"

# One lock per counters file, shared by every store instance in the process
_FILE_LOCKS: Dict[Path, threading.Lock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _FILE_LOCKS_GUARD:
        lock = _FILE_LOCKS.get(key)
        if lock is None:
            lock = _FILE_LOCKS[key] = threading.Lock()
        return lock


def _write_json_atomic(path: Path, data: dict) -> None:
    """Write JSON to a temp file next to `path`, fsync, then rename over it."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


class FileCounterStore(CounterStore):
    """Per-region counters kept in a single counters.json file."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / COUNTERS_FILENAME
        self._lock = _lock_for(self.path)

    # ------------------------------------------------------------------
    # Blocking helpers (always called with self._lock held)
    # ------------------------------------------------------------------
    def _load(self) -> Dict[str, int]:
        """
        Read counters.json.

        - Missing file → {} (every region starts at 0).
        - Unreadable / non-object content → StorageError. Resetting to {}
          here would hand out already used IDs again.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Corrupt counters file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Counters file {self.path} does not hold an object")
        return data

    @staticmethod
    def _value(counters: Dict[str, int], region_key: str) -> int:
        try:
            return int(counters.get(region_key, 0))
        except (TypeError, ValueError) as e:
            raise StorageError(
                f"Invalid counter value for {region_key!r}: {counters.get(region_key)!r}"
            ) from e

    def _increment_locked(self, region_key: str) -> int:
        with self._lock:
            counters = self._load()
            last = self._value(counters, region_key)

            nxt = last + 1
            counters[region_key] = nxt

            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
                _write_json_atomic(self.path, counters)
            except OSError as e:
                raise StorageError(f"Cannot write {self.path}: {e}") from e

            return nxt

    def _current_locked(self, region_key: str) -> int:
        with self._lock:
            return self._value(self._load(), region_key)

    # ------------------------------------------------------------------
    # CounterStore
    # ------------------------------------------------------------------
    async def increment(self, region_key: str) -> int:
        return await asyncio.to_thread(self._increment_locked, region_key)

    async def current(self, region_key: str) -> int:
        return await asyncio.to_thread(self._current_locked, region_key)


class FileSubmissionStore(SubmissionStore):
    """One JSON file per submission under DATA_DIR/<region_key>/."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, region_key: str, submission_id: str) -> Path:
        return self.data_dir / region_key / f"{submission_id}.json"

    def _create_sync(self, submission: Submission) -> None:
        path = self.path_for(submission.region_key, submission.id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # "x" → fail instead of overwriting an existing record
            with path.open("x", encoding="utf-8") as fh:
                fh.write(submission.model_dump_json(indent=2))
        except FileExistsError as e:
            raise StorageError(f"Record file already exists: {path}") from e
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

    def _get_sync(self, region_key: str, submission_id: str) -> Optional[Submission]:
        path = self.path_for(region_key, submission_id)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e
        try:
            return Submission.model_validate_json(raw)
        except ValidationError as e:
            raise StorageError(f"Corrupt record file {path}: {e}") from e

    async def create(self, submission: Submission) -> None:
        await asyncio.to_thread(self._create_sync, submission)

    async def get(self, region_key: str, submission_id: str) -> Optional[Submission]:
        return await asyncio.to_thread(self._get_sync, region_key, submission_id)
