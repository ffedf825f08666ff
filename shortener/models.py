"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class Entry:
    """Represents a stored URL with its insertion time and TTL override."""
    
    value: str
    inserted_at: datetime
    ttl: Optional[timedelta] = None
    
    def __post_init__(self):
        # A zero or negative override means "use the store default"
        if self.ttl is not None and self.ttl <= timedelta(0):
            object.__setattr__(self, "ttl", None)
