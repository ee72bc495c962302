"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from api.config import config as api_config
from api.services import CatalogService, CustomerService
from catalog.seed import load_seed_books
from catalog.store import BookstoreStore


TEST_SECRET = "test-signing-secret"


@pytest.fixture(autouse=True)
def auth_settings(monkeypatch):
    """Use a known signing secret and the cheapest bcrypt work factor."""
    monkeypatch.setattr(api_config, "jwt_secret", TEST_SECRET)
    monkeypatch.setattr(api_config, "bcrypt_rounds", 4)
    return api_config


@pytest.fixture
def no_secret(monkeypatch):
    """Run with the signing secret unset."""
    monkeypatch.setattr(api_config, "jwt_secret", None)


@pytest.fixture
def store():
    """Create a store preloaded with the seed catalog."""
    return BookstoreStore(books=load_seed_books())


@pytest.fixture
def catalog_service(store):
    return CatalogService(store)


@pytest.fixture
def customer_service(store):
    return CustomerService(store)


@pytest.fixture
def client():
    """Create a test client with a freshly seeded application state."""
    from api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def injected_client(store):
    """Create a test client bound to the given store, bypassing startup seeding."""
    from api.main import app, init_services

    init_services(store)
    return TestClient(app)


@pytest.fixture
def register_and_login(client):
    """Register a customer over HTTP and return the auth header for them."""

    def _register_and_login(username: str = "alice", password: str = "secret") -> dict:
        response = client.post("/customer/register", json={"username": username, "password": password})
        assert response.status_code == 201
        response = client.post("/customer/login", json={"username": username, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register_and_login


@pytest.fixture
def sample_seed_records():
    """Sample seed file content in the ISBN-keyed layout."""
    return {
        "978-0": {"title": "Harry Potter and the Philosopher's Stone", "author": "J.K. Rowling"},
        "978-1": {"title": "Harry Potter and the Chamber of Secrets", "author": "J.K. Rowling"},
        "978-2": {"title": "Dune", "author": "Frank Herbert", "reviews": {"carol": "Spice!"}},
    }
