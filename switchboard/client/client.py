"""
Switchboard Dashboard Client

HTTP client for the Switchboard API, with the dashboard's query cache
semantics: GET results are cached under a query key and dropped by key
prefix after a mutation.
"""

import os
from typing import Any

import httpx

QueryKey = tuple[str, ...]


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class UnauthorizedError(ApiError):
    """401 response; the session is missing or expired."""


def _error_message(response: httpx.Response, fallback: str | None = None) -> str:
    """Pull a human-readable message out of an error response."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        for key in ("message", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, list) and value:
                # FastAPI validation errors
                return "; ".join(
                    str(item.get("msg", item)) if isinstance(item, dict) else str(item)
                    for item in value
                )

    return fallback or response.reason_phrase or f"HTTP {response.status_code}"


class DashboardClient:
    """
    Async HTTP client for the dashboard endpoints.

    Use ``from_env()`` to build one from SWITCHBOARD_API_URL and
    SWITCHBOARD_TOKEN.
    """

    def __init__(
        self,
        api_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            api_url: Switchboard API URL
            token: Bearer access token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.api_url = api_url.rstrip("/")
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._http = httpx.AsyncClient(
            base_url=self.api_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self._cache: dict[QueryKey, Any] = {}

    @classmethod
    def from_env(cls) -> "DashboardClient":
        """
        Build a client from environment variables.

        Raises:
            RuntimeError: If SWITCHBOARD_API_URL is not set
        """
        api_url = os.getenv("SWITCHBOARD_API_URL")
        if not api_url:
            raise RuntimeError(
                "SWITCHBOARD_API_URL environment variable required.\n"
                "  export SWITCHBOARD_API_URL=http://localhost:8000"
            )
        return cls(api_url, token=os.getenv("SWITCHBOARD_TOKEN"))

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        error_message: str | None = None,
    ) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method
            path: API path
            json: Optional JSON body
            error_message: Message to use when the error body carries none

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            UnauthorizedError: On 401
            ApiError: On any other non-2xx status
        """
        response = await self._http.request(method, path, json=json)

        if response.status_code == 401:
            raise UnauthorizedError(401, _error_message(response, "Unauthorized"))
        if not response.is_success:
            raise ApiError(response.status_code, _error_message(response, error_message))

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def query(self, key: QueryKey, path: str | None = None) -> Any:
        """
        GET with caching by query key.

        The path defaults to the key's parts joined with "/".
        """
        if key in self._cache:
            return self._cache[key]
        data = await self.request("GET", path or "/".join(key))
        self._cache[key] = data
        return data

    def invalidate(self, prefix: QueryKey) -> None:
        """Drop every cached query whose key starts with ``prefix``."""
        for key in [k for k in self._cache if k[:len(prefix)] == prefix]:
            del self._cache[key]

    def is_cached(self, key: QueryKey) -> bool:
        return key in self._cache

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> "DashboardClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
