"""Shared BDD fixtures for the Store domain."""

import pytest


@pytest.fixture()
def products():
    """Product ids keyed by product name."""
    return {}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}
