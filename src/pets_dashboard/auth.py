"""
Process-wide holder for the Petfinder bearer token.

One token request per cache miss (client-credentials grant), no retries.
The token is reused until shortly before `expires_in` and dropped whenever a
data call comes back 401.
"""
from __future__ import annotations
import sys, time, asyncio
from typing import Callable, Optional

import httpx

from .errors import AuthenticationError, status_of
from .http_client import HttpClient
from .models import TokenResponse

AUTH_FAILED = "Failed to authenticate with Petfinder API"
EXPIRY_MARGIN = 60.0  # seconds
DEFAULT_TTL = 3600


class CredentialHolder:

    def __init__(
        self,
        http: HttpClient,
        client_id: str,
        client_secret: str,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.http = http
        self.client_id = client_id
        self.client_secret = client_secret
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    @property
    def token(self) -> Optional[str]:
        return self._token

    def _valid(self) -> bool:
        return self._token is not None and self._clock() < self._expires_at - EXPIRY_MARGIN

    async def get_token(self, cancel: Optional[asyncio.Event] = None) -> str:
        """Return the cached token or fetch a fresh one; concurrent callers share one fetch."""
        if self._valid():
            return self._token  # type: ignore[return-value]
        async with self._lock:
            if not self._valid():
                self._token, ttl = await self._fetch(cancel)
                self._expires_at = self._clock() + ttl
            return self._token  # type: ignore[return-value]

    def invalidate(self, token: Optional[str] = None) -> None:
        """Drop the cached token. With `token`, only drop it if it is still the cached one."""
        if token is None or token == self._token:
            self._token = None
            self._expires_at = 0.0

    async def _fetch(self, cancel: Optional[asyncio.Event]) -> tuple[str, int]:
        try:
            resp = await self.http.request(
                "POST",
                "/oauth2/token",
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                },
                cancel=cancel,
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(AUTH_FAILED, status=status_of(e)) from e

        try:
            payload: TokenResponse = resp.json()
            token = payload["access_token"]
            if not isinstance(token, str) or not token:
                raise TypeError("access_token missing")
        except (ValueError, KeyError, TypeError) as e:
            print(f"[warn] unusable token response: {resp.text[:200]}", file=sys.stderr)
            raise AuthenticationError(AUTH_FAILED, status=resp.status_code) from e

        try:
            ttl = int(payload.get("expires_in", DEFAULT_TTL))
        except (TypeError, ValueError):
            ttl = DEFAULT_TTL
        return token, ttl

