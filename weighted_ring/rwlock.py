"""
Reader/writer lock

Shared for lookups, exclusive for mutations. Waiting writers block new
readers so a steady stream of lookups cannot starve add/remove calls.
The lock is not re-entrant.
"""

import threading
from contextlib import contextmanager


class ReadWriteLock:
    """A writer-preferring reader/writer lock built on threading.Condition"""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read called without a matching acquire_read")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write called without a matching acquire_write")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def reader(self):
        """Hold the lock in shared mode for the duration of the block"""
        self.acquire_read()
        try:
            yield self
        finally:
            self.release_read()

    @contextmanager
    def writer(self):
        """Hold the lock exclusively for the duration of the block"""
        self.acquire_write()
        try:
            yield self
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def write_locked(self) -> bool:
        return self._writer
