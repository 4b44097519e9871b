"""Fixtures for cross-domain tests.

These tests run the assembled application: the identity domain issues
tokens and the store domain resolves them in-process.
"""

import os

import pytest


@pytest.fixture(scope="session")
def _identity_domain(request):
    """Initialize the identity domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from identity.domain import identity

    identity.init()
    return identity


@pytest.fixture(scope="session")
def _store_domain(request):
    """Initialize the store domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from store.domain import store

    store.init()
    return store


@pytest.fixture(scope="session", autouse=True)
def setup_databases(_identity_domain, _store_domain):
    """Create database schemas for both domains."""
    from shared.db import drop_db, setup_db

    setup_db(_identity_domain)
    setup_db(_store_domain)

    yield

    drop_db(_identity_domain)
    drop_db(_store_domain)


@pytest.fixture(autouse=True)
def clean_domains(_identity_domain, _store_domain):
    """Wipe both domains after every test."""
    yield

    from shared.db import reset_data

    for domain in (_identity_domain, _store_domain):
        with domain.domain_context():
            reset_data(domain)


@pytest.fixture
def identity_ctx(_identity_domain):
    """Push identity domain context for a test."""
    ctx = _identity_domain.domain_context()
    ctx.push()

    yield _identity_domain

    ctx.pop()


@pytest.fixture
def local_auth():
    """Resolve store bearer tokens against the in-process identity domain."""
    from store.auth import LocalAuthenticator, reset_authenticator, set_authenticator

    set_authenticator(LocalAuthenticator())

    yield

    reset_authenticator()
