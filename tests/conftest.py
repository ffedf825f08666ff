"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.store import ExpiringStore
from shortener.service import URLShortenerService
from shortener.identifiers import IdentifierGenerator
from shortener.common.auth import hash_token
from shortener.common.logging_config import setup_logging
from web_app import create_app


TEST_TOKEN = "correct horse battery staple"


class FakeClock:
    """Manually advanced clock returning aware UTC datetimes."""
    
    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    
    def __call__(self) -> datetime:
        return self.now
    
    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class StubGenerator(IdentifierGenerator):
    """Generator that always returns the same identifier."""
    
    def __init__(self, identifier: str = "aaaaaaaa"):
        super().__init__()
        self.identifier = identifier
        self.calls = 0
    
    def mint(self) -> str:
        self.calls += 1
        return self.identifier


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock, logger) -> ExpiringStore:
    """Create store with a one hour default TTL and a fake clock."""
    return ExpiringStore(default_ttl=timedelta(hours=1), clock=clock, logger=logger)


@pytest.fixture
def service(store, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(store=store, logger=logger)


@pytest.fixture
def config() -> Config:
    return Config(
        token_sha256=hash_token(TEST_TOKEN),
        host="testserver",
        port=443,
    )


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(store=store, service=service, config=config)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
