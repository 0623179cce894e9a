# src/services/product_enricher.py

"""Per-product enrichment: detail, description, images and thumbnail."""

import asyncio
import logging

from src.clients.mercadolibre_client import MercadoLibreClient
from src.config.settings import Settings
from src.models.product import (
    EnrichedProduct,
    EnrichmentResult,
    ProductDetail,
    ProductSummary,
)
from src.services.image_importer import ImageImporter


class ProductEnricher:
    """Turns search hits into enriched products, one isolated task each."""

    def __init__(
        self,
        client: MercadoLibreClient,
        image_importer: ImageImporter,
        logger: logging.Logger | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        self.client = client
        self.image_importer = image_importer
        self.settings = Settings()
        self.logger = logger or logging.getLogger("ml_source.enricher")
        self._max_concurrency = (
            max_concurrency or self.settings.MAX_CONCURRENT_PRODUCTS
        )

    async def _description(self, item_id: str) -> str | None:
        data = await self.client.get_item_description(item_id)
        if not data:
            return None
        text = data.get("plain_text")
        return str(text) if text is not None else None

    async def _enrich(
        self, summary: ProductSummary, total_products: int,
    ) -> EnrichedProduct:
        item, description = await asyncio.gather(
            self.client.get_item(summary.id),
            self._description(summary.id),
        )
        detail = ProductDetail.from_api(item)

        images, thumbnail = await asyncio.gather(
            self.image_importer.import_images(
                detail.id, detail.pictures, total_products
            ),
            self.image_importer.import_thumbnail(
                detail.id, detail.pictures[0] if detail.pictures else None
            ),
        )
        return EnrichedProduct(
            detail=detail,
            item_id=detail.id,
            item_description=description,
            item_images=images,
            item_thumbnail=thumbnail,
        )

    async def enrich(
        self, summary: ProductSummary, total_products: int,
    ) -> EnrichmentResult:
        """Enrich one product; failures are captured, never raised."""
        try:
            product = await self._enrich(summary, total_products)
        except Exception as exc:
            self.logger.error(
                "Error getting product data for %s: %s",
                summary.id,
                exc,
                exc_info=True,
            )
            return EnrichmentResult(product_id=summary.id, error=str(exc))
        return EnrichmentResult(product_id=summary.id, product=product)

    async def enrich_all(
        self, summaries: list[ProductSummary],
    ) -> list[EnrichmentResult]:
        """Enrich every product through a bounded pool and wait for all."""
        total = len(summaries)
        if total > self.settings.SLOW_IMPORT_THRESHOLD:
            self.logger.warning(
                "Importing a lot of products (%d). This may take a while.",
                total,
            )
        if total > self.settings.IMAGE_LIMIT_THRESHOLD:
            self.logger.warning(
                "Limiting to %d images per product.",
                self.settings.MAX_IMAGES_LARGE_BATCH,
            )

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def run_one(summary: ProductSummary) -> EnrichmentResult:
            async with semaphore:
                return await self.enrich(summary, total)

        return list(await asyncio.gather(*(run_one(s) for s in summaries)))
