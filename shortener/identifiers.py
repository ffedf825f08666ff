"""Identifier generation for short URLs."""

import secrets
import string

from .exceptions import GenerationError


class IdentifierGenerator:
    """Generate random fixed-length identifiers.

    Identifiers are drawn from the operating system's CSPRNG. Uniqueness is
    not checked here; only the store can check membership atomically.
    """
    
    # Lowercase letters and digits, 36 characters
    ALPHABET = string.ascii_lowercase + string.digits
    LENGTH = 8
    
    def __init__(self, rng=None):
        """Initialize identifier generator.
        
        Args:
            rng: Optional random source exposing ``randrange``. Defaults to
                ``secrets.SystemRandom``.
        """
        self._rng = rng or secrets.SystemRandom()
    
    def mint(self) -> str:
        """Generate a new random identifier.
        
        Returns:
            An identifier of ``LENGTH`` characters from ``ALPHABET``
            
        Raises:
            GenerationError: If the random source fails
        """
        base = len(self.ALPHABET)
        try:
            indices = [self._rng.randrange(base) for _ in range(self.LENGTH)]
        except (OSError, NotImplementedError) as e:
            raise GenerationError(f"Random source failed: {e}") from e
        
        return ''.join(self.ALPHABET[i] for i in indices)
    
    @classmethod
    def is_valid_format(cls, identifier: str) -> bool:
        """Check if identifier has the generated shape.
        
        Args:
            identifier: Identifier to validate
            
        Returns:
            True if valid format
        """
        return (
            isinstance(identifier, str)
            and len(identifier) == cls.LENGTH
            and all(c in cls.ALPHABET for c in identifier)
        )
