# src/clients/mercadolibre_client.py

"""Async client for the public Mercado Libre REST API."""

import asyncio
import json
import logging
import urllib.parse
from typing import Any, cast

from curl_cffi import requests as curl_requests

from src.config.settings import Settings


class MercadoLibreApiError(Exception):
    """A request to the Mercado Libre API failed for good."""

    def __init__(
        self, url: str, status_code: int | None = None, reason: str = "",
    ) -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        detail = f"HTTP {status_code}" if status_code else reason
        super().__init__(f"{detail} for {url}")


class MercadoLibreClient:
    """Async wrapper around the three endpoints the plugin reads.

    - ``/sites/{site_id}/search?nickname={username}[&offset=N]``
    - ``/items/{id}``
    - ``/items/{id}/description``

    Transient failures (transport errors, 429 and 5xx) are retried up to
    ``MAX_RETRIES`` times with a linearly growing delay; anything else
    raises :class:`MercadoLibreApiError` straight away.
    """

    def __init__(
        self,
        api_host: str | None = None,
        session: curl_requests.AsyncSession | None = None,
    ) -> None:
        self.logger = logging.getLogger("ml_source.client")
        self.settings = Settings()
        self.api_host = (api_host or self.settings.API_HOST).rstrip("/")
        self.session = session or curl_requests.AsyncSession(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self.request_count: int = 0

    async def __aenter__(self) -> "MercadoLibreClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the underlying HTTP session."""
        await self.session.close()

    # ── URLs ─────────────────────────────────────────────

    def search_url(
        self, site_id: str, username: str, offset: int = 0,
    ) -> str:
        """Build the seller search URL; page one carries no offset."""
        url = (
            f"{self.api_host}/sites/{site_id}/search"
            f"?nickname={urllib.parse.quote(username, safe='')}"
        )
        if offset:
            url = f"{url}&offset={offset}"
        return url

    def item_url(self, item_id: str) -> str:
        return f"{self.api_host}/items/{item_id}"

    def description_url(self, item_id: str) -> str:
        return f"{self.api_host}/items/{item_id}/description"

    # ── Transport ────────────────────────────────────────

    async def _fetch(
        self, url: str, allow_not_found: bool = False,
    ) -> curl_requests.Response | None:
        """GET with retries.

        Returns ``None`` for a 404 when *allow_not_found* is set.
        """
        last_error = ""
        for attempt in range(self.settings.MAX_RETRIES):
            self.request_count += 1
            try:
                resp = await self.session.get(
                    url,
                    headers=self.settings.DEFAULT_HEADERS,
                    timeout=self.settings.REQUEST_TIMEOUT,
                )
            except Exception as exc:
                last_error = str(exc)
                self.logger.warning(
                    "Request error on attempt %d for %s: %s",
                    attempt + 1,
                    url,
                    exc,
                    exc_info=True,
                )
                await asyncio.sleep(
                    self.settings.RETRY_DELAY * (attempt + 1)
                )
                continue

            if resp.status_code == 200:
                return resp
            if resp.status_code == 404 and allow_not_found:
                self.logger.debug("Not found: %s", url)
                return None
            if resp.status_code not in self.settings.RETRY_STATUS_CODES:
                raise MercadoLibreApiError(url, resp.status_code)

            last_error = f"HTTP {resp.status_code}"
            self.logger.warning(
                "HTTP %d on attempt %d for %s",
                resp.status_code,
                attempt + 1,
                url,
            )
            await asyncio.sleep(
                self.settings.RETRY_DELAY * (attempt + 1)
            )

        raise MercadoLibreApiError(
            url, reason=f"gave up after {self.settings.MAX_RETRIES} attempts ({last_error})"
        )

    async def _fetch_json(
        self, url: str, allow_not_found: bool = False,
    ) -> dict[str, Any] | None:
        resp = await self._fetch(url, allow_not_found=allow_not_found)
        if resp is None:
            return None
        try:
            data: dict[str, Any] = json.loads(resp.text)
        except json.JSONDecodeError as exc:
            raise MercadoLibreApiError(
                url, reason=f"invalid JSON: {exc}"
            ) from exc
        return data

    # ── Endpoints ────────────────────────────────────────

    async def search(
        self, site_id: str, username: str, offset: int = 0,
    ) -> dict[str, Any]:
        """Fetch one page of a seller's listings."""
        url = self.search_url(site_id, username, offset)
        return cast(dict[str, Any], await self._fetch_json(url))

    async def get_item(self, item_id: str) -> dict[str, Any]:
        """Fetch the full item record."""
        return cast(
            dict[str, Any], await self._fetch_json(self.item_url(item_id))
        )

    async def get_item_description(
        self, item_id: str,
    ) -> dict[str, Any] | None:
        """Fetch the item description, or ``None`` when it has none."""
        return await self._fetch_json(
            self.description_url(item_id), allow_not_found=True
        )

    async def download(self, url: str) -> bytes:
        """Download a binary asset such as a product picture."""
        resp = cast(curl_requests.Response, await self._fetch(url))
        return bytes(resp.content)
