# src/services/image_importer.py

"""Download product pictures into the local cache and register File nodes."""

import asyncio
import hashlib
import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from src.clients.mercadolibre_client import MercadoLibreClient
from src.config.settings import Settings
from src.models.node import Node
from src.services.node_factory import NodeFactory

logger = logging.getLogger("ml_source.images")

# Mercado Libre encodes the picture size as a one-letter suffix
# (``...-I.jpg``, ``...-O.jpg``); ``O`` is the original upload.
_SIZE_SUFFIX_RE = re.compile(r"-[A-Z]\.(jpe?g|png|webp|gif)$", re.IGNORECASE)


def largest_variation_url(picture: dict[str, Any]) -> str:
    """Return the URL of the largest variation of a picture, or ``""``."""
    url = str(picture.get("secure_url") or picture.get("url") or "")
    if not url:
        return ""
    return _SIZE_SUFFIX_RE.sub(lambda m: f"-O.{m.group(1)}", url)


def image_limit(total_products: int) -> int | None:
    """Max pictures imported per product for a batch, ``None`` if unlimited."""
    if total_products > Settings.IMAGE_LIMIT_THRESHOLD:
        return Settings.MAX_IMAGES_LARGE_BATCH
    return None


class ImageImporter:
    """Imports pictures once per URL and hands File nodes to the host."""

    def __init__(
        self,
        client: MercadoLibreClient,
        node_factory: NodeFactory,
        create_node: Callable[[Node], None],
        cache_dir: Path | None = None,
    ) -> None:
        self.client = client
        self.node_factory = node_factory
        self.create_node = create_node
        self.cache_dir: Path = cache_dir or Settings.CACHE_DIR
        self._imports: dict[str, asyncio.Task[Node]] = {}

    def _cache_path(self, url: str) -> Path:
        digest = hashlib.md5(url.encode("utf-8")).hexdigest()
        suffix = Path(url.split("?", 1)[0]).suffix or ".jpg"
        return self.cache_dir / f"{digest}{suffix.lower()}"

    async def _download_and_register(self, url: str) -> Node:
        path = self._cache_path(url)
        if path.exists():
            logger.debug("Cache hit for %s", url)
        else:
            content = await self.client.download(url)
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
            logger.debug("Downloaded %s (%d bytes)", url, len(content))

        node = self.node_factory.create_file_node(
            url,
            {
                "absolutePath": str(path),
                "extension": path.suffix.lstrip("."),
                "size": path.stat().st_size,
            },
        )
        self.create_node(node)
        return node

    async def _import(self, url: str, product_id: str) -> str:
        task = self._imports.get(url)
        if task is None:
            task = asyncio.ensure_future(self._download_and_register(url))
            self._imports[url] = task
        try:
            node = await task
        except Exception:
            # Failed downloads get a fresh attempt from the next product
            if self._imports.get(url) is task:
                del self._imports[url]
            logger.warning("Could not import %s for %s", url, product_id)
            raise
        return node.id

    async def import_images(
        self,
        product_id: str,
        pictures: list[dict[str, Any]],
        total_products: int,
    ) -> list[str]:
        """Import a product's pictures and return their File node ids.

        Only the first ``MAX_IMAGES_LARGE_BATCH`` pictures are imported
        when the batch exceeds ``IMAGE_LIMIT_THRESHOLD`` products.
        """
        limit = image_limit(total_products)
        selected = pictures[:limit] if limit is not None else pictures
        urls = [u for u in map(largest_variation_url, selected) if u]
        if len(urls) < len(selected):
            logger.debug(
                "Skipped %d pictures without URL for %s",
                len(selected) - len(urls),
                product_id,
            )
        return list(
            await asyncio.gather(*(self._import(u, product_id) for u in urls))
        )

    async def import_thumbnail(
        self, product_id: str, picture: dict[str, Any] | None,
    ) -> str | None:
        """Import the thumbnail picture, returning its File node id."""
        if not picture:
            return None
        url = largest_variation_url(picture)
        if not url:
            return None
        return await self._import(url, product_id)
