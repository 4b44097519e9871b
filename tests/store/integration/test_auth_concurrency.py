"""Token validation must not hold up other requests while it waits on the identity service."""

import time

import anyio
import httpx
import pytest
from fastapi import FastAPI
from shared.errors import register_error_handlers
from store.api.routes import wishlist_router
from store.auth import AuthenticatedUser, FakeAuthenticator, reset_authenticator, set_authenticator

SHOPPER = {"Authorization": "Bearer shopper-token"}
DELAY = 0.3


class SlowAuthenticator(FakeAuthenticator):
    def validate_token(self, token):
        time.sleep(DELAY)
        return super().validate_token(token)


@pytest.fixture()
def app():
    slow = SlowAuthenticator()
    slow.register("shopper-token", AuthenticatedUser(id="user-001", email="shopper@example.com", name="Shopper"))
    set_authenticator(slow)

    app = FastAPI()
    app.include_router(wishlist_router)
    register_error_handlers(app)

    yield app

    reset_authenticator()


def _get_concurrently(app, count):
    codes = []

    async def fetch(client):
        response = await client.get("/wishlist", headers=SHOPPER)
        codes.append(response.status_code)

    async def main():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://store") as client:
            async with anyio.create_task_group() as tg:
                for _ in range(count):
                    tg.start_soon(fetch, client)

    anyio.run(main)
    return codes


def test_slow_token_checks_overlap(app):
    started = time.perf_counter()
    codes = _get_concurrently(app, 4)
    elapsed = time.perf_counter() - started

    assert codes == [200, 200, 200, 200]
    assert elapsed < DELAY * 3
