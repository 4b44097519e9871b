"""Authenticator that asks a remote identity service over HTTP.

One POST per call, no retries and no caching: the remote service is the
only source of truth for token validity.
"""

import requests
from requests.utils import quote

from shared.config import auth_timeout_seconds, user_service_url
from shared.logging import get_logger
from store.auth.port import AuthenticatedUser, Authenticator

logger = get_logger(__name__)


class HttpAuthenticator(Authenticator):
    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        self.base_url = (base_url or user_service_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else auth_timeout_seconds()

    def validate_token(self, token: str) -> AuthenticatedUser | None:
        url = f"{self.base_url}/users/validate/{quote(token, safe='')}"
        try:
            response = requests.post(url, timeout=self.timeout)
        except requests.RequestException:
            logger.error("Token validation request failed", url=self.base_url, exc_info=True)
            return None

        if not 200 <= response.status_code < 300:
            logger.warning("Token rejected by identity service", status_code=response.status_code)
            return None

        try:
            payload = response.json() if response.content else None
        except ValueError:
            logger.warning("Identity service returned a non-JSON body")
            return None

        if not payload or "id" not in payload:
            logger.warning("Identity service returned an empty user")
            return None

        return AuthenticatedUser.from_payload(payload)
