"""Exceptions raised by the URL shortener.

Classes:
    ShortenerError:
        Generic base class for URL shortener exceptions.

    StoreError:
        Base class for failures of the expiring store.

    GenerationError:
        Raised when the random source used to mint identifiers fails.

    CollisionError:
        Raised when a freshly minted identifier is already live in the store.

    ClientError:
        Raised by the outbound client when the server rejects a request or
        replies with something that is not a short URL.
"""


class ShortenerError(Exception):
    """Generic base class for URL shortener exceptions."""

    pass


class StoreError(ShortenerError):
    """Base class for expiring store failures."""

    pass


class GenerationError(StoreError):
    """Exception raised when the random source fails."""

    pass


class CollisionError(StoreError):
    """Exception raised when a minted identifier is already in use."""

    def __init__(self, identifier: str):
        super().__init__(f"Identifier collision detected: {identifier}")
        self.identifier = identifier


class ClientError(ShortenerError):
    """Exception raised when creating a short URL through the API fails."""

    pass
