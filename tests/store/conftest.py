import os

import pytest


@pytest.fixture(scope="session")
def _store_domain(request):
    """Initialize the store domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from store.domain import store

    store.init()
    return store


@pytest.fixture(scope="session", autouse=True)
def setup_db(_store_domain):
    from shared.db import drop_db, setup_db

    setup_db(_store_domain)

    yield

    drop_db(_store_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_store_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _store_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain
    from shared.db import reset_data

    reset_data(current_domain)
    ctx.pop()


@pytest.fixture()
def authenticator():
    """Fake authenticator with one shopper and one admin token registered."""
    from store.auth import AuthenticatedUser, FakeAuthenticator, reset_authenticator, set_authenticator

    fake = FakeAuthenticator()
    fake.register(
        "shopper-token",
        AuthenticatedUser(id="user-001", email="shopper@example.com", name="Shopper", roles=("USER",)),
    )
    fake.register(
        "other-token",
        AuthenticatedUser(id="user-002", email="other@example.com", name="Other Shopper", roles=("USER",)),
    )
    fake.register(
        "admin-token",
        AuthenticatedUser(id="admin-001", email="admin@example.com", name="Admin", roles=("USER", "ADMIN")),
    )
    set_authenticator(fake)

    yield fake

    reset_authenticator()
