"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from catalog.repository import BookRepository
from library_api.auth import TokenService
from library_api.config import APIConfig
from library_api.main import create_app


@pytest.fixture
def api_config():
    """Configuration used by the test application."""
    return APIConfig(
        _env_file=None,
        environment="test",
        jwt_secret="test-secret-key",
        log_level="WARNING",
        log_format="console"
    )


@pytest.fixture
def repository():
    """Repository loaded with the seeded catalog."""
    return BookRepository.seeded()


@pytest.fixture
def token_service(api_config):
    """Token service signing with the test secret."""
    return TokenService.from_config(api_config)


@pytest.fixture
def app(api_config, repository, token_service):
    """Application wired to the fixtures above."""
    return create_app(settings=api_config, repository=repository, token_service=token_service)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def admin_token(token_service):
    """A valid admin token."""
    return token_service.issue("admin", "test123").token


@pytest.fixture
def auth_headers(admin_token):
    """Authorization header carrying a valid admin token."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def new_book_payload():
    """Minimal valid body for creating a book."""
    return {
        "title": "T",
        "author": "A",
        "isbn": "978-0135957059"
    }


@pytest.fixture
def full_book_payload():
    """Body for creating a book with every field set."""
    return {
        "title": "Working Effectively with Legacy Code",
        "author": "Michael Feathers",
        "isbn": "978-0131177055",
        "publishedYear": 2004,
        "available": False
    }
