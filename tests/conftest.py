"""Pytest fixtures for all tests."""

import pytest
from httpx import AsyncClient, ASGITransport

from fakes import ISSUER_CREDENTIALS, FixedClock, SeededRandomBytes
from config import Config, TokenConfig
from tokens.api_key import ApiKeyFormat
from tokens.object_id import ObjectIdFormat
from tokens.random_source import RandomSource
from ui.app import create_app


@pytest.fixture
def random_bytes():
    """Create a seeded byte source."""
    return SeededRandomBytes(seed=42)


@pytest.fixture
def clock():
    """Create a clock frozen at FIXED_NOW."""
    return FixedClock()


@pytest.fixture
def token_config():
    """Create default token layout config."""
    return TokenConfig()


@pytest.fixture
def random_source(random_bytes):
    """Create a deterministic random source."""
    return RandomSource(random_bytes)


@pytest.fixture
def api_keys(token_config):
    """Create an ApiKey format using system randomness."""
    return ApiKeyFormat(config=token_config)


@pytest.fixture
def seeded_api_keys(token_config, random_source):
    """Create an ApiKey format using seeded randomness."""
    return ApiKeyFormat(config=token_config, random_source=random_source)


@pytest.fixture
def object_ids(token_config, random_source, clock):
    """Create an object id format with seeded randomness and a frozen clock."""
    return ObjectIdFormat(config=token_config, random_source=random_source, clock=clock)


@pytest.fixture
async def app(random_bytes, clock):
    """Create test FastAPI app."""
    return create_app(Config(), random_bytes=random_bytes, clock=clock, issuer_credentials=ISSUER_CREDENTIALS)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
