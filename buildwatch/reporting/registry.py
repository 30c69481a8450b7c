"""Writer registry — the unit name -> sink mapping shared by worker threads.

Lookups take the shared side of a reader/writer lock; insertions and
removals take the exclusive side.  The critical sections cover the dict
access only, never a write to the sink itself.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

W = TypeVar("W")


class ReadWriteLock:
    """A reader/writer lock that prefers waiting writers.

    Any number of readers may hold the lock at once; a writer holds it
    alone.  New readers queue behind a waiting writer.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class WriterRegistry(Generic[W]):
    """Holds at most one writer per unit name.

    Usage
    -----
    >>> registry = WriterRegistry()
    >>> writer, created = registry.get_or_create("app", make_writer)
    >>> registry.pop("app")
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._writers: dict[str, W] = {}

    def get(self, name: str) -> W | None:
        with self._lock.read():
            return self._writers.get(name)

    def replace(self, name: str, writer: W) -> W | None:
        """Install *writer* for *name*, returning the writer it replaced."""
        with self._lock.write():
            previous = self._writers.get(name)
            self._writers[name] = writer
        return previous

    def get_or_create(self, name: str, factory: Callable[[], W]) -> tuple[W, bool]:
        """Return the writer for *name*, creating it if absent.

        The second element is ``True`` when this call created the writer.
        Two racing callers always end up with the same writer.
        """
        with self._lock.read():
            writer = self._writers.get(name)
        if writer is not None:
            return writer, False

        with self._lock.write():
            writer = self._writers.get(name)
            if writer is not None:
                return writer, False
            writer = factory()
            self._writers[name] = writer
        return writer, True

    def pop(self, name: str) -> W | None:
        """Remove and return the writer for *name*, if any."""
        with self._lock.write():
            return self._writers.pop(name, None)

    def names(self) -> list[str]:
        with self._lock.read():
            return sorted(self._writers)

    def __contains__(self, name: object) -> bool:
        with self._lock.read():
            return name in self._writers

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._writers)
