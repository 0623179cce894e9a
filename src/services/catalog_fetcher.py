# src/services/catalog_fetcher.py

"""Collect a seller's full listing by paginating the search endpoint."""

import asyncio
import logging
import math
from typing import Any

from src.clients.mercadolibre_client import MercadoLibreClient
from src.config.settings import Settings
from src.models.product import Catalog, FilterTaxonomy, ProductSummary


class CatalogFetcher:
    """Paginates ``/sites/{site_id}/search`` for one seller.

    The first request reports the total and the page size; the remaining
    pages are then requested concurrently by offset and concatenated.
    A failing page raises and aborts the fetch.
    """

    def __init__(
        self,
        client: MercadoLibreClient,
        logger: logging.Logger | None = None,
    ) -> None:
        self.client = client
        self.settings = Settings()
        self.logger = logger or logging.getLogger("ml_source.catalog")

    @staticmethod
    def page_offsets(total: int, page_size: int) -> list[int]:
        """Offsets of the pages still needed after the first one."""
        if total <= 0 or page_size <= 0:
            return []
        pages = math.ceil(total / page_size)
        return [page * page_size for page in range(1, pages)]

    async def _fetch_page(
        self, site_id: str, username: str, offset: int,
    ) -> list[dict[str, Any]]:
        data = await self.client.search(site_id, username, offset)
        results: list[dict[str, Any]] = data.get("results") or []
        self.logger.debug(
            "Page at offset %d returned %d results", offset, len(results)
        )
        return results

    @staticmethod
    def _merge(pages: list[list[dict[str, Any]]]) -> list[ProductSummary]:
        """Concatenate pages, keeping the first hit per product id."""
        seen: set[str] = set()
        merged: list[ProductSummary] = []
        for page in pages:
            for hit in page:
                summary = ProductSummary.from_api(hit)
                if summary.id in seen:
                    continue
                seen.add(summary.id)
                merged.append(summary)
        return merged

    async def fetch(self, site_id: str, username: str) -> Catalog:
        """Return every listing of *username* on *site_id* plus its filters."""
        first = await self.client.search(site_id, username)
        paging: dict[str, Any] = first.get("paging") or {}
        total = int(paging.get("total") or 0)
        page_size = int(paging.get("limit") or self.settings.PAGE_SIZE)

        taxonomy = FilterTaxonomy(
            site_id=site_id,
            username=username,
            available_filters=list(first.get("available_filters") or []),
            applied_filters=list(first.get("filters") or []),
        )

        offsets = self.page_offsets(total, page_size)
        self.logger.info(
            "Seller %s on %s has %d products (%d pages of %d)",
            username,
            site_id,
            total,
            len(offsets) + 1,
            page_size,
        )

        remaining = await asyncio.gather(
            *(self._fetch_page(site_id, username, o) for o in offsets)
        )
        pages = [list(first.get("results") or []), *remaining]
        products = self._merge(pages)

        fetched = sum(len(p) for p in pages)
        if fetched != len(products):
            self.logger.info(
                "Dropped %d duplicate hits across pages",
                fetched - len(products),
            )

        return Catalog(products=products, taxonomy=taxonomy, total=total)
