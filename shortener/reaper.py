"""Background removal of expired store entries."""

import logging
import threading
from typing import Optional

from .store import ExpiringStore


class Reaper:
    """Periodically delete expired entries from an ExpiringStore.
    
    Each pass scans under the read lock, then deletes the collected
    identifiers under the write lock. No lock is held while sleeping.
    """
    
    def __init__(
        self,
        store: ExpiringStore,
        interval: float = 30.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the reaper.
        
        Args:
            store: Store to clean up
            interval: Seconds between passes
            logger: Optional logger
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        
        self.store = store
        self.interval = interval
        self.logger = logger or logging.getLogger(__name__)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
    
    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
    
    def run_once(self) -> int:
        """Run a single scan-then-delete pass.
        
        Returns:
            Number of entries deleted
        """
        expired = self.store.collect_expired()
        if not expired:
            self.logger.debug("Reaper pass: nothing expired")
            return 0
        
        removed = self.store.delete(expired)
        self.logger.info(f"Reaper pass: removed {removed} expired entries")
        return removed
    
    def run_forever(self) -> None:
        """Run passes every ``interval`` seconds until stopped."""
        while not self._stop.wait(self.interval):
            self.run_once()
    
    def start(self) -> None:
        """Start the reaper on a daemon thread."""
        if self.running:
            return
        
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run_forever,
            name="expired-entry-reaper",
            daemon=True,
        )
        self._thread.start()
        self.logger.info(f"Started expired entry reaper (interval={self.interval}s)")
    
    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the reaper to stop and wait for its thread."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            self.logger.info("Stopped expired entry reaper")
