"""Core of the expiring URL shortener."""

from .identifiers import IdentifierGenerator
from .models import Entry
from .store import ExpiringStore
from .reaper import Reaper
from .service import URLShortenerService

__all__ = ["IdentifierGenerator", "Entry", "ExpiringStore", "Reaper", "URLShortenerService"]
