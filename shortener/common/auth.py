"""Secret token helpers."""

import hashlib
import hmac
import re


_SHA256_HEX = re.compile(r"^[0-9a-f]{64}$")


def hash_token(token: str) -> str:
    """Return the hex SHA-256 digest of a token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def is_sha256_hex(value: str) -> bool:
    return bool(_SHA256_HEX.match(value or ""))


def verify_token(token: str, expected_sha256: str) -> bool:
    """Compare a token against a configured digest in constant time.
    
    Args:
        token: The token supplied with the request
        expected_sha256: Hex SHA-256 digest of the secret token
        
    Returns:
        True if the token hashes to ``expected_sha256``
    """
    if not token:
        return False
    return hmac.compare_digest(hash_token(token), expected_sha256.lower())
