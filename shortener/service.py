"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any
from datetime import timedelta

from .store import ExpiringStore
from .exceptions import CollisionError
from .common.validators import is_valid_url


class URLShortenerService:
    """Service layer between the HTTP handlers and the expiring store."""
    
    def __init__(
        self,
        store: ExpiringStore,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 2,
    ):
        """Initialize URL shortener service.
        
        Args:
            store: Expiring store instance
            logger: Optional logger
            max_collision_retries: Extra attempts after an identifier collision
        """
        if max_collision_retries < 0:
            raise ValueError("max_collision_retries must be >= 0")
        
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
    
    def create_short_url(
        self,
        original_url: str,
        ttl: Optional[timedelta] = None,
    ) -> Dict[str, Any]:
        """Create a new short URL.
        
        Args:
            original_url: The original long URL
            ttl: Optional TTL override
            
        Returns:
            Dictionary with short_code, original_url, created_at, expires_at
            
        Raises:
            ValueError: If validation fails
            StoreError: If no identifier could be reserved
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise ValueError(error)
        
        if ttl is not None and ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        
        short_code = self._reserve_identifier()
        entry = self.store.insert(short_code, original_url, ttl)
        expires_at = self.store.expires_at(entry)
        
        self.logger.info(f"Created short URL: {short_code} -> {original_url} (expires {expires_at.isoformat()})")
        
        return {
            "short_code": short_code,
            "original_url": entry.value,
            "created_at": entry.inserted_at,
            "expires_at": expires_at,
        }
    
    def get_original_url(self, short_code: str) -> Optional[str]:
        """Get the original URL for a short code.
        
        Expired entries that the reaper has not removed yet are reported as
        missing.
        
        Args:
            short_code: The short code to lookup
            
        Returns:
            Original URL or None if not found or expired
        """
        entry = self.store.lookup(short_code)
        
        if entry is None:
            self.logger.debug(f"Short code not found: {short_code}")
            return None
        
        if self.store.is_expired(entry):
            self.logger.debug(f"Short code expired: {short_code}")
            return None
        
        return entry.value
    
    def health_check(self) -> Dict[str, Any]:
        """Report store size.
        
        Returns:
            Dictionary with health status
        """
        return {
            "overall": True,
            "entries": len(self.store),
        }
    
    def _reserve_identifier(self) -> str:
        """Reserve an identifier, retrying a bounded number of times on collision.
        
        Raises:
            CollisionError: If every attempt collided
            GenerationError: If the random source fails
        """
        attempts = self.max_collision_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return self.store.reserve_identifier()
            except CollisionError:
                if attempt == attempts:
                    self.logger.error(f"Giving up after {attempts} identifier collisions")
                    raise
                self.logger.warning(f"Identifier collision, retrying ({attempt}/{attempts})")
