import pytest
from fastapi.testclient import TestClient

from config import get_identity_provider, get_store
from main import app
from fakes import FakeIdentityProvider, InMemoryStore
from repository.store import USERS

LOOKER = "looker-1"
PROVIDER = "provider-1"
OTHER = "stranger-1"
ADMIN = "admin-1"

TOKENS = {
    "looker-token": LOOKER,
    "provider-token": PROVIDER,
    "other-token": OTHER,
    "admin-token": ADMIN,
}


def bearer(uid):
    """Authorization header for one of the known test users."""
    token = {v: k for k, v in TOKENS.items()}[uid]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def store():
    s = InMemoryStore()
    s.seed(USERS, LOOKER, {"role": "Looker", "favoriteProviders": []})
    s.seed(USERS, PROVIDER, {"role": "Provider", "favoriteProviders": []})
    s.seed(USERS, ADMIN, {"role": "Admin", "favoriteProviders": []})
    return s


@pytest.fixture
def identity():
    return FakeIdentityProvider(TOKENS)


@pytest.fixture
def client(store, identity):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_identity_provider] = lambda: identity
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
