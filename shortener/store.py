"""In-memory store with expiring entries."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Optional

from .exceptions import CollisionError
from .identifiers import IdentifierGenerator
from .locks import ReadWriteLock
from .models import Entry


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class ExpiringStore:
    """Map of identifiers to entries that expire after a TTL.
    
    A single reader/writer lock guards the mapping. Lookups never delete:
    an expired entry stays in the map until the reaper removes it, and
    callers are expected to check ``is_expired`` themselves.
    """
    
    def __init__(
        self,
        default_ttl: timedelta,
        generator: Optional[IdentifierGenerator] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the store.
        
        Args:
            default_ttl: TTL applied to entries without an override
            generator: Optional identifier generator
            clock: Optional callable returning the current aware UTC time
            logger: Optional logger
        """
        if default_ttl <= timedelta(0):
            raise ValueError("default_ttl must be positive")
        
        self._default_ttl = default_ttl
        self._entries: Dict[str, Entry] = {}
        self._lock = ReadWriteLock()
        self.generator = generator or IdentifierGenerator()
        self.clock = clock or utc_now
        self.logger = logger or logging.getLogger(__name__)
    
    @property
    def default_ttl(self) -> timedelta:
        return self._default_ttl
    
    def reserve_identifier(self) -> str:
        """Mint an identifier that is not currently in the store.
        
        The identifier is generated outside the lock and checked under the
        read lock. There is no retry: a collision is reported to the caller.
        
        Returns:
            A fresh identifier
            
        Raises:
            GenerationError: If the random source fails
            CollisionError: If the identifier is already in use
        """
        identifier = self.generator.mint()
        
        with self._lock.read_locked():
            taken = identifier in self._entries
        
        if taken:
            self.logger.warning(f"Identifier collision: {identifier}")
            raise CollisionError(identifier)
        
        return identifier
    
    def insert(self, identifier: str, value: str, ttl: Optional[timedelta] = None) -> Entry:
        """Insert an entry unconditionally.
        
        The caller is expected to have just reserved ``identifier``. Racing
        inserts of the same identifier resolve as last writer wins.
        
        Args:
            identifier: Identifier returned by ``reserve_identifier``
            value: The stored value (the original URL)
            ttl: Optional TTL override for this entry
            
        Returns:
            The inserted entry

        Raises:
            ValueError: If the entry's expiry time cannot be represented
        """
        entry = Entry(value=value, inserted_at=self.clock(), ttl=ttl)
        try:
            self.expires_at(entry)
        except OverflowError as e:
            raise ValueError("ttl is too large") from e

        with self._lock.write_locked():
            self._entries[identifier] = entry
        
        self.logger.debug(f"Inserted {identifier} (ttl={self.effective_ttl(entry)})")
        return entry
    
    def lookup(self, identifier: str) -> Optional[Entry]:
        """Get the entry for an identifier, expired or not.
        
        Args:
            identifier: The identifier to lookup
            
        Returns:
            The entry if present, None otherwise
        """
        with self._lock.read_locked():
            return self._entries.get(identifier)
    
    def effective_ttl(self, entry: Entry) -> timedelta:
        return entry.ttl if entry.ttl is not None else self._default_ttl
    
    def expires_at(self, entry: Entry) -> datetime:
        """Time after which the entry is considered expired."""
        return entry.inserted_at + self.effective_ttl(entry)
    
    def is_expired(self, entry: Entry, now: Optional[datetime] = None) -> bool:
        """Check whether an entry has outlived its TTL.
        
        Args:
            entry: The entry to check
            now: Optional reference time (defaults to the store clock)
            
        Returns:
            True if ``inserted_at + ttl`` is strictly before ``now``
        """
        if now is None:
            now = self.clock()
        return self.expires_at(entry) < now
    
    def collect_expired(self) -> List[str]:
        """List identifiers of expired entries under the read lock."""
        now = self.clock()
        with self._lock.read_locked():
            return [
                identifier
                for identifier, entry in self._entries.items()
                if self.is_expired(entry, now)
            ]
    
    def delete(self, identifiers: Iterable[str]) -> int:
        """Delete identifiers under the write lock.
        
        Identifiers that are already gone are skipped, so deleting the same
        batch twice is harmless.
        
        Args:
            identifiers: Identifiers to remove
            
        Returns:
            Number of entries removed
        """
        removed = 0
        with self._lock.write_locked():
            for identifier in identifiers:
                if self._entries.pop(identifier, None) is not None:
                    removed += 1
        return removed
    
    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)
    
    def __contains__(self, identifier: str) -> bool:
        with self._lock.read_locked():
            return identifier in self._entries
