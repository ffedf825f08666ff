"""Tests for the expired entry reaper."""

import time
import pytest
from datetime import timedelta
from unittest.mock import MagicMock

from shortener.reaper import Reaper
from shortener.store import ExpiringStore


class TestReaperPass:
    """Test single scan-then-delete passes."""
    
    def test_run_once_removes_only_expired(self, store, clock, logger):
        store.insert("expired1", "https://example.com/1", ttl=timedelta(seconds=1))
        store.insert("expired2", "https://example.com/2", ttl=timedelta(seconds=30))
        store.insert("livelive", "https://example.com/3")
        clock.advance(minutes=1)
        
        reaper = Reaper(store, interval=30, logger=logger)
        
        assert reaper.run_once() == 2
        assert len(store) == 1
        assert store.lookup("livelive") is not None
    
    def test_run_once_is_idempotent(self, store, clock, logger):
        """Two passes in a row leave the same live set."""
        store.insert("expired1", "https://example.com/1", ttl=timedelta(seconds=1))
        store.insert("livelive", "https://example.com/2")
        clock.advance(seconds=5)
        reaper = Reaper(store, logger=logger)
        
        reaper.run_once()
        after_first = {k: store.lookup(k) for k in ("expired1", "livelive")}
        
        assert reaper.run_once() == 0
        after_second = {k: store.lookup(k) for k in ("expired1", "livelive")}
        
        assert after_first == after_second
        assert len(store) == 1
    
    def test_empty_scan_skips_write_lock(self, logger):
        """No delete phase when nothing has expired."""
        store = MagicMock(spec=ExpiringStore)
        store.collect_expired.return_value = []
        
        reaper = Reaper(store, logger=logger)
        
        assert reaper.run_once() == 0
        store.delete.assert_not_called()
    
    def test_delete_receives_collected_ids(self, logger):
        store = MagicMock(spec=ExpiringStore)
        store.collect_expired.return_value = ["aaaaaaaa", "bbbbbbbb"]
        store.delete.return_value = 2
        
        reaper = Reaper(store, logger=logger)
        
        assert reaper.run_once() == 2
        store.delete.assert_called_once_with(["aaaaaaaa", "bbbbbbbb"])
    
    def test_interval_must_be_positive(self, store):
        with pytest.raises(ValueError):
            Reaper(store, interval=0)


class TestReaperThread:
    """Test the background loop."""
    
    def test_start_and_stop(self, store, logger):
        reaper = Reaper(store, interval=0.05, logger=logger)
        
        reaper.start()
        assert reaper.running
        
        reaper.stop(timeout=2)
        assert not reaper.running
    
    def test_start_twice_keeps_one_thread(self, store, logger):
        reaper = Reaper(store, interval=0.05, logger=logger)
        
        reaper.start()
        thread = reaper._thread
        reaper.start()
        
        assert reaper._thread is thread
        reaper.stop(timeout=2)
    
    def test_background_reaping_empties_store(self, logger):
        """Entries with the default TTL disappear once the reaper runs past it."""
        store = ExpiringStore(default_ttl=timedelta(milliseconds=100), logger=logger)
        store.insert(store.reserve_identifier(), "https://example.com/a")
        store.insert(store.reserve_identifier(), "https://example.com/b")
        assert len(store) == 2
        
        reaper = Reaper(store, interval=0.05, logger=logger)
        reaper.start()
        try:
            deadline = time.monotonic() + 3
            while len(store) and time.monotonic() < deadline:
                time.sleep(0.02)
        finally:
            reaper.stop(timeout=2)
        
        assert len(store) == 0
