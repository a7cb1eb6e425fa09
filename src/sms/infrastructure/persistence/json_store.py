"""Building blocks for the JSON-file store.

``JsonFile`` stages reads and writes of one ``<name>.json`` document in
memory; ``CommitJournal`` writes a set of staged documents to disk as one
all-or-nothing step; ``DataDirLock`` gives one unit of work at a time
exclusive access to the whole data directory.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import threading
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

JOURNAL_NAME = "commit.journal"

# One entry per data directory ever locked in this process. The CLI touches
# a single directory, so the registry stays tiny.
_thread_locks: dict[Path, threading.Lock] = {}
_registry_guard = threading.Lock()


def _temp_path(file_path: Path) -> Path:
    return file_path.with_name(file_path.name + ".tmp")


class JsonFile:
    """A JSON array of records, loaded lazily and staged until committed."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._records: list[dict] | None = None
        self._dirty = False

    @property
    def path(self) -> Path:
        return self._file_path

    @property
    def dirty(self) -> bool:
        return self._dirty

    def read(self) -> list[dict]:
        if self._records is None:
            self._records = self._load()
        return list(self._records)

    def write(self, records: list[dict]) -> None:
        self._records = list(records)
        self._dirty = True

    def stage(self) -> Path:
        """Write the staged records to ``<name>.json.tmp`` and return that path."""
        tmp_path = _temp_path(self._file_path)
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(json.dumps(self._records, indent=2) + "\n")
            f.flush()
            os.fsync(f.fileno())
        return tmp_path

    def mark_clean(self) -> None:
        self._dirty = False

    def discard(self) -> None:
        self._records = None
        self._dirty = False

    def _load(self) -> list[dict]:
        if not self._file_path.exists():
            return []
        return json.loads(self._file_path.read_text(encoding="utf-8"))


class CommitJournal:
    """Commits several ``JsonFile`` documents as a single step.

    Every changed document is first written to its ``.json.tmp`` file.
    Only then is the journal, naming those documents, renamed into place;
    from that moment the commit is decided. The temp files are renamed over
    their documents and the journal is removed.

    ``recover()`` runs before any read. A journal left by an interrupted
    commit is rolled forward; temp files without a journal belong to a
    commit that never got decided and are deleted.
    """

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._path = data_dir / JOURNAL_NAME

    def commit(self, documents: Iterable[JsonFile]) -> None:
        changed = [document for document in documents if document.dirty]
        if not changed:
            return
        try:
            for document in changed:
                document.stage()
        except BaseException:
            for document in changed:
                _temp_path(document.path).unlink(missing_ok=True)
            raise

        self._write([document.path.name for document in changed])
        self._apply()
        for document in changed:
            document.mark_clean()

    def recover(self) -> None:
        if self._path.exists():
            logger.warning("Completing interrupted commit in %s", self._data_dir)
            self._apply()
            return
        for leftover in self._data_dir.glob("*.json.tmp"):
            logger.warning("Removing uncommitted file %s", leftover)
            leftover.unlink(missing_ok=True)
        _temp_path(self._path).unlink(missing_ok=True)

    def _write(self, names: list[str]) -> None:
        tmp_path = _temp_path(self._path)
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(json.dumps(names) + "\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self._path)

    def _apply(self) -> None:
        names = json.loads(self._path.read_text(encoding="utf-8"))
        for name in names:
            target = self._data_dir / name
            tmp_path = _temp_path(target)
            # Already renamed if an earlier attempt got this far.
            if tmp_path.exists():
                os.replace(tmp_path, target)
        self._path.unlink()


class DataDirLock:
    """Exclusive lock over a data directory.

    A process-wide ``threading.Lock`` per directory serializes threads;
    ``fcntl.flock`` on ``<dir>/.lock`` serializes processes.
    """

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir.resolve()
        self._fd: int | None = None
        with _registry_guard:
            self._thread_lock = _thread_locks.setdefault(self._data_dir, threading.Lock())

    def acquire(self) -> None:
        self._thread_lock.acquire()
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            self._fd = os.open(self._data_dir / ".lock", os.O_RDWR | os.O_CREAT, 0o644)
            fcntl.flock(self._fd, fcntl.LOCK_EX)
        except BaseException:
            self._close()
            self._thread_lock.release()
            raise

    def release(self) -> None:
        try:
            if self._fd is not None:
                fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            self._close()
            self._thread_lock.release()

    def _close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None
