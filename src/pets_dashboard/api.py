"""
Async API wrapper around the Petfinder animal endpoints.

Provides a typed interface for:
- Listing up to `limit` animals (`list_animals`)
- Fetching one animal by id (`get_animal`)

Both take an explicit bearer token, so a data call can only be made once a
token exists. Non-2xx and network failures surface as `FetchError`; a 401 also
drops the token from the shared `CredentialHolder`.
"""
from __future__ import annotations
import sys, asyncio
from typing import List, Optional

import httpx

from .auth import CredentialHolder
from .errors import FetchError, status_of
from .http_client import HttpClient
from .models import Animal, AnimalsPage, AnimalEnvelope

PAGE_SIZE = 100
LIST_FAILED = "Failed to fetch pets"
DETAIL_FAILED = "Failed to fetch pet details"


class PetfinderAPI:

    def __init__(self, http: HttpClient, credentials: Optional[CredentialHolder] = None):
        self.http = http
        self.credentials = credentials

    async def _get(self, path: str, token: str, failure: str, cancel: Optional[asyncio.Event], **kwargs) -> httpx.Response:
        try:
            return await self.http.request(
                "GET", path, headers={"Authorization": f"Bearer {token}"}, cancel=cancel, **kwargs
            )
        except httpx.HTTPStatusError as e:
            status = status_of(e)
            if status == 401 and self.credentials is not None:
                self.credentials.invalidate(token)
            raise FetchError(failure, status=status) from e
        except httpx.HTTPError as e:
            raise FetchError(str(e) or failure) from e

    async def list_animals(self, token: str, limit: int = PAGE_SIZE, cancel: Optional[asyncio.Event] = None) -> List[Animal]:
        resp = await self._get("/animals", token, LIST_FAILED, cancel, params={"limit": limit})
        try:
            page: AnimalsPage = resp.json()
        except ValueError as e:
            print(f"[warn] non-JSON animal list: {resp.text[:200]}", file=sys.stderr)
            raise FetchError(LIST_FAILED, status=resp.status_code) from e
        if not isinstance(page, dict):
            raise FetchError(LIST_FAILED, status=resp.status_code)
        return list(page.get("animals") or [])

    async def get_animal(self, token: str, animal_id: int | str, cancel: Optional[asyncio.Event] = None) -> Optional[Animal]:
        resp = await self._get(f"/animals/{animal_id}", token, DETAIL_FAILED, cancel)
        try:
            envelope: AnimalEnvelope = resp.json()
        except ValueError as e:
            print(f"[warn] non-JSON response for id {animal_id}: {resp.text[:200]}", file=sys.stderr)
            raise FetchError(DETAIL_FAILED, status=resp.status_code) from e
        if not isinstance(envelope, dict):
            return None
        return envelope.get("animal") or None
