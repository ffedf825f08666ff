"""Reader/writer lock for the expiring store."""

import threading
from contextlib import contextmanager


class ReadWriteLock:
    """A lock allowing many concurrent readers or a single writer.
    
    Waiting writers block new readers, so a steady stream of lookups cannot
    starve inserts or the reaper. The lock is not reentrant.
    """
    
    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
    
    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
    
    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read called without a read lock held")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()
    
    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
    
    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write called without the write lock held")
            self._writer = False
            self._cond.notify_all()
    
    @contextmanager
    def read_locked(self):
        """Hold the lock in shared mode for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()
    
    @contextmanager
    def write_locked(self):
        """Hold the lock exclusively for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
