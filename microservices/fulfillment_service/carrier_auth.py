"""
Carrier Auth Manager

Holds the carrier bearer token. Login happens lazily; expiry is detected
by the caller (HTTP 401), which calls invalidate() and tries again.

Concurrent callers may both see no token and both log in; the later
token simply replaces the earlier one.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from core.config import CarrierConfig

from .protocols import CarrierAuthError

logger = logging.getLogger(__name__)


class CarrierAuthManager:
    """Carrier session: Unauthenticated (token None) or Authenticated"""

    def __init__(self, config: CarrierConfig, http_client: httpx.AsyncClient):
        self.config = config
        self.client = http_client
        self._token: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    async def ensure_authenticated(self) -> str:
        """
        Return the held token, logging in first when there is none.

        Raises:
            CarrierAuthError: missing credentials, transport failure,
                rejected login or a response without a token
        """
        if self._token is None:
            self._token = await self._login()
        return self._token

    def invalidate(self) -> None:
        """Forget the held token"""
        if self._token is not None:
            logger.info("Carrier token invalidated")
        self._token = None

    def auth_headers(self) -> Dict[str, str]:
        if self._token is None:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    async def _login(self) -> str:
        if not self.config.has_credentials:
            raise CarrierAuthError("Carrier authentication failed: credentials are not configured")

        try:
            response = await self.client.post(
                f"{self.config.base_url}/auth/login",
                json={"email": self.config.email, "password": self.config.password},
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                timeout=self.config.timeout,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Carrier authentication timed out: {e}")
            raise CarrierAuthError("Carrier authentication failed: timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Carrier authentication error: {e}")
            raise CarrierAuthError(f"Carrier authentication failed: {e}") from e

        data = response_json(response)

        if response.status_code >= 400:
            message = data.get("message") or response.text or f"HTTP {response.status_code}"
            logger.error(f"Carrier authentication rejected: status={response.status_code} message={message}")
            raise CarrierAuthError(
                f"Carrier authentication failed: {message}",
                status_code=response.status_code,
            )

        token = data.get("token")
        if not token:
            logger.error("Carrier authentication returned no token")
            raise CarrierAuthError(
                "Carrier authentication failed: no token received",
                status_code=response.status_code,
            )

        logger.info("Authenticated with carrier")
        return token


def response_body(response: httpx.Response) -> Any:
    """Decoded JSON body, or None when the body is not JSON"""
    try:
        return response.json()
    except ValueError:
        return None


def response_json(response: httpx.Response) -> Dict[str, Any]:
    """JSON object body; {} for non-JSON or non-object bodies"""
    body = response_body(response)
    return body if isinstance(body, dict) else {}
