"""A JSON array on disk, read whole and written whole.

Writes go to a sibling temp file that is then ``os.replace``-d over the
original, so a reader never sees a half-written aggregate.  Read-modify-write
sequences run inside ``lock()``, an exclusive lock on a sibling ``.lock``
file shared by every process and thread that opens the same store.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock


class JsonFileStore:

    def __init__(self, file_path: Path, lock_timeout: float = 10.0) -> None:
        self._file_path = file_path
        self._lock_path = file_path.with_name(file_path.name + ".lock")
        self._lock_timeout = lock_timeout
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold the store exclusively for a load, check and persist."""
        with FileLock(self._lock_path, timeout=self._lock_timeout):
            yield

    def load(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
