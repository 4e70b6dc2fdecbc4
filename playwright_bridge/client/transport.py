"""
httpx-backed stand-in for Playwright's ``page.request``.
Lets the helpers drive the bridge from plain scripts and API-level tests
without launching a browser.
"""

from typing import Any

import httpx


class HttpxAPIResponse:
    """Mirrors the parts of Playwright's ``APIResponse`` the helpers use."""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def ok(self) -> bool:
        return 200 <= self._response.status_code <= 299

    @property
    def url(self) -> str:
        return str(self._response.url)

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._response.headers)

    async def body(self) -> bytes:
        return self._response.content

    async def text(self) -> str:
        return self._response.text

    async def json(self) -> Any:
        return self._response.json()


class HttpxAPIRequestContext:
    """Mirrors Playwright's ``APIRequestContext.get`` and ``post``."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> HttpxAPIResponse:
        response = await self.client.get(url, headers=headers, params=params)
        return HttpxAPIResponse(response)

    async def post(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        data: Any = None,
    ) -> HttpxAPIResponse:
        response = await self.client.post(url, headers=headers, json=data)
        return HttpxAPIResponse(response)

    async def dispose(self) -> None:
        await self.client.aclose()


class HttpxPage:
    """
    Page-like object exposing ``request`` so the helpers accept it.

    Example:
        async with httpx.AsyncClient(base_url="http://127.0.0.1:8000") as client:
            page = HttpxPage(client)
            user = await login(page)
    """

    def __init__(self, client: httpx.AsyncClient):
        self.request = HttpxAPIRequestContext(client)

    @classmethod
    def for_base_url(cls, base_url: str, timeout: float = 30.0) -> "HttpxPage":
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def close(self) -> None:
        await self.request.dispose()
