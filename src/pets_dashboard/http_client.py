# pets_dashboard/http_client.py
from __future__ import annotations
import sys, asyncio, uuid, contextlib
from typing import Optional
import httpx

from .errors import RequestCancelled


class HttpClient:
    """
    - Reusable async HTTP client with:
      - base_url
      - httpx timeouts
      - one attempt per call, non-2xx raised as httpx.HTTPStatusError
      - per-call cancellation signal
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout: float,
        read_timeout: float,
        *,
        default_headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=read_timeout,
            pool=read_timeout,
        )
        self.default_headers = {"Accept": "application/json", **(default_headers or {})}
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.default_headers,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._client is not None:
            await self._client.aclose()

    async def _send(self, method: str, path: str, cancel: Optional[asyncio.Event], **kwargs) -> httpx.Response:
        assert self._client is not None
        if cancel is None:
            return await self._client.request(method, path, **kwargs)
        if cancel.is_set():
            raise RequestCancelled(f"{method} {path} cancelled before start")

        send = asyncio.ensure_future(self._client.request(method, path, **kwargs))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait({send, waiter}, return_when=asyncio.FIRST_COMPLETED)
            if send in done:
                return send.result()
        finally:
            waiter.cancel()
            if not send.done():
                send.cancel()
                # collect the outcome so nothing is left unretrieved
                with contextlib.suppress(asyncio.CancelledError, httpx.HTTPError):
                    await send
        raise RequestCancelled(f"{method} {path} cancelled")

    async def request(self, method: str, path: str, *, cancel: Optional[asyncio.Event] = None, **kwargs) -> httpx.Response:
        """
        Send one request; no retries. Non-2xx responses raise httpx.HTTPStatusError,
        network failures propagate as httpx.HTTPError. A set `cancel` event aborts
        the in-flight request with RequestCancelled.
        Each request tagged with X-Request-Id for traceability.
        """
        assert self._client is not None

        req_id = kwargs.pop("req_id", str(uuid.uuid4()))
        headers = kwargs.pop("headers", {})
        headers.setdefault("X-Request-Id", req_id)
        kwargs["headers"] = headers

        url = self.base_url + path # for logs

        try:
            resp = await self._send(method, path, cancel, **kwargs)
        except httpx.HTTPError as e:
            print(f"[req#{req_id}] [fatal] {method} {url}: network error: {e}", file=sys.stderr)
            raise

        status = resp.status_code
        if not (200 <= status < 300):
            print(f"[req#{req_id}] [fatal] {method} {url} returned {status}", file=sys.stderr)
            raise httpx.HTTPStatusError(f"HTTP {status} for {method} {url}", request=resp.request, response=resp)
        return resp
