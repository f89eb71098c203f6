"""
Remote Notes HTTP Client.

Thin wrapper around httpx.AsyncClient used by RemoteNoteRepository.
Connection details come from storage.yaml, the bearer token from
config/.env; both can be passed explicitly instead.

Every request carries X-Frontend-ID (cli or tui) so the backend can tell
the two front ends apart in its logs.

Usage:
    client = APIClient(frontend_id="tui")
    response = await client.request("GET", "/api/v1/notes")
    await client.close()
"""

from typing import Any

import httpx

from notepad.core.config import get_remote_base_url, get_settings
from notepad.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


class APIClient:
    """
    Lazily connected async HTTP client for the notes backend.

    The underlying httpx.AsyncClient is created on the first request and
    recreated if it was closed. Transport errors are logged and re-raised
    unchanged; status codes are left to the caller.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        frontend_id: str = "cli",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            base_url: Backend root URL. Default: storage.yaml remote.base_url
            timeout: Seconds per request. Default: storage.yaml remote.timeout
            token: Bearer token. Default: NOTES_API_TOKEN; empty sends no header
            frontend_id: X-Frontend-ID header value
            transport: Custom httpx transport, e.g. httpx.MockTransport
        """
        if base_url is None:
            try:
                base_url, configured_timeout = get_remote_base_url()
            except Exception as e:
                raise RuntimeError(
                    "Remote backend is not configured in config/settings/storage.yaml"
                ) from e
            if timeout is None:
                timeout = configured_timeout

        self.base_url = base_url.rstrip("/")
        self.timeout = DEFAULT_TIMEOUT if timeout is None else timeout
        self.frontend_id = frontend_id
        self._token = get_settings().notes_api_token if token is None else token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _headers(self) -> dict[str, str]:
        headers = {"X-Frontend-ID": self.frontend_id}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Send one request relative to base_url.

        Raises:
            httpx.HTTPError: If no response was received
        """
        client = await self._get_client()
        log_with_source(logger, "repository", "debug", "Remote request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger, "repository", "error", "Remote request failed",
                method=method, path=path, error=str(e),
            )
            raise

        log_with_source(
            logger, "repository", "debug", "Remote response",
            method=method, path=path, status_code=response.status_code,
        )
        return response

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)
