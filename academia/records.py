"""Line-oriented record files: ``user:password:courses[:flag]`` entries.

Writers take an exclusive lock, and rewrites go through a temporary file that
replaces the original in one step, so readers never see a half-written file.
"""

from __future__ import annotations

import os
import re
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator

try:
    import fcntl
except ImportError:  # pragma: no cover - non-POSIX platforms
    fcntl = None  # type: ignore[assignment]

FIELD_SEPARATOR = ":"
COURSE_SEPARATOR = ","
NO_COURSES = "x"
FILE_MODE = 0o644


def tokens(text: str | None, separators: str) -> list[str]:
    """Split *text* on any of *separators*, dropping empty pieces."""
    if not text:
        return []
    if not separators:
        return [text]
    pattern = "[" + re.escape(separators) + "]"
    return [piece for piece in re.split(pattern, text) if piece]


def split_course_list(courses: str | None) -> list[str]:
    """Course codes held in a courses field; ``x`` or nothing means none."""
    if courses is None or courses == NO_COURSES:
        return []
    return tokens(courses, COURSE_SEPARATOR)


def join_course_list(courses: Iterable[str]) -> str:
    """Courses field for *courses*; ``x`` when there are none."""
    joined = COURSE_SEPARATOR.join(courses)
    return joined or NO_COURSES


class _PathLock:
    """Re-entrant lock shared by threads, backed by a lock file across processes."""

    def __init__(self, lock_path: str) -> None:
        self._lock_path = lock_path
        self._mutex = threading.RLock()
        self._depth = 0
        self._handle = None

    @contextmanager
    def hold(self) -> Iterator[None]:
        with self._mutex:
            if self._depth == 0:
                handle = open(self._lock_path, "a")
                if fcntl is not None:
                    fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
                self._handle = handle
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
                if self._depth == 0 and self._handle is not None:
                    if fcntl is not None:
                        fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
                    self._handle.close()
                    self._handle = None


_registry_guard = threading.Lock()
_path_locks: dict[str, _PathLock] = {}


def _lock_for(path: Path) -> _PathLock:
    key = os.path.abspath(path)
    with _registry_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _PathLock(key + ".lock")
            _path_locks[key] = lock
        return lock


class RecordFile:
    """A text file of newline-terminated records."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"RecordFile({str(self.path)!r})"

    def exists(self) -> bool:
        return self.path.is_file()

    def lines(self) -> list[str]:
        """All records, without line endings; a final unterminated line is kept.

        Raises FileNotFoundError when the file does not exist.
        """
        text = self.path.read_text(encoding="utf-8")
        pieces = text.split("\n")
        if pieces and pieces[-1] == "":
            pieces.pop()
        return pieces

    def append(self, line: str) -> None:
        """Append one record, creating the file if needed."""
        with self.locked():
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(line + "\n")

    def rewrite(self, transform: Callable[[str], str]) -> list[str]:
        """Replace every record by ``transform(record)`` and return the new records.

        If *transform* raises, the file is left untouched and the exception
        propagates.
        """
        with self.locked():
            new_lines = [transform(line) for line in self.lines()]
            directory = self.path.parent if str(self.path.parent) else Path(".")
            fd, temp_name = tempfile.mkstemp(
                prefix=self.path.name + ".", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.writelines(line + "\n" for line in new_lines)
                os.chmod(temp_name, FILE_MODE)
                os.replace(temp_name, self.path)
            except BaseException:
                if os.path.exists(temp_name):
                    os.unlink(temp_name)
                raise
            return new_lines

    @contextmanager
    def locked(self) -> Iterator["RecordFile"]:
        """Hold the file's exclusive lock; nested use in one thread is allowed."""
        with _lock_for(self.path).hold():
            yield self