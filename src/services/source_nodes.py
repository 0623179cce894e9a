# src/services/source_nodes.py

"""Plugin entry point: fetch the seller catalog and create host nodes."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from src.clients.mercadolibre_client import MercadoLibreClient
from src.config.plugin_options import PluginOptions
from src.config.settings import Settings
from src.models.node import Node
from src.models.product import EnrichedProduct, EnrichmentResult
from src.services.catalog_fetcher import CatalogFetcher
from src.services.image_importer import ImageImporter
from src.services.node_factory import NodeFactory
from src.services.product_enricher import ProductEnricher

PLUGIN_NAME = "mercadolibre_source"


class NodeActions(Protocol):
    """The node helpers a host hands to a source plugin."""

    def create_node(self, node: Node) -> None: ...

    def create_node_id(self, seed: str) -> str: ...

    def create_content_digest(self, content: Any) -> str: ...


@dataclass
class SourceRun:
    """Outcome of one synchronisation run."""

    options: PluginOptions
    total_products: int = 0
    products: list[EnrichedProduct] = field(
        default_factory=lambda: list[EnrichedProduct]()
    )
    failures: list[EnrichmentResult] = field(
        default_factory=lambda: list[EnrichmentResult]()
    )
    nodes: list[Node] = field(default_factory=lambda: list[Node]())
    aborted: str | None = None

    @property
    def product_nodes(self) -> list[Node]:
        return [
            n for n in self.nodes
            if n.type == Settings.PRODUCT_NODE_TYPE
        ]


async def source_nodes(
    actions: NodeActions,
    options: Mapping[str, Any],
    client: MercadoLibreClient | None = None,
    logger: logging.Logger | None = None,
    cache_dir: Path | None = None,
) -> SourceRun:
    """Run the plugin: validate options, fetch, enrich, create nodes.

    Failures never escape: configuration and catalog errors abort the
    run with a logged warning, per-product errors drop that product.
    The returned :class:`SourceRun` records what happened.
    """
    log = logger or logging.getLogger("ml_source.source_nodes")
    opts = PluginOptions.from_mapping(options)
    run = SourceRun(options=opts)

    missing = opts.missing()
    if missing:
        for name in missing:
            log.warning(
                "Please add a %s to the %s plugin configuration.",
                name,
                PLUGIN_NAME,
            )
        run.aborted = f"missing option(s): {', '.join(missing)}"
        return run

    owns_client = client is None
    api = client or MercadoLibreClient()
    try:
        await _run(actions, opts, api, log, cache_dir, run)
    finally:
        if owns_client:
            await api.close()
    return run


async def _run(
    actions: NodeActions,
    opts: PluginOptions,
    api: MercadoLibreClient,
    log: logging.Logger,
    cache_dir: Path | None,
    run: SourceRun,
) -> None:
    search_url = api.search_url(opts.site_id, opts.username)
    fetcher = CatalogFetcher(api, logger=log)
    try:
        catalog = await fetcher.fetch(opts.site_id, opts.username)
    except Exception as exc:
        log.error(
            "There was a problem with %s. Check this endpoint: %s (%s)",
            PLUGIN_NAME,
            search_url,
            exc,
            exc_info=True,
        )
        run.aborted = f"catalog fetch failed: {exc}"
        return

    run.total_products = len(catalog.products)
    if not catalog.products:
        log.warning(
            "Mercado Libre API returned 0 products. Check the "
            "configuration options and make sure the user has "
            "published products."
        )
        run.aborted = "empty catalog"
        return

    create_node: Callable[[Node], None] = actions.create_node
    factory = NodeFactory(
        actions.create_node_id, actions.create_content_digest
    )
    importer = ImageImporter(api, factory, create_node, cache_dir=cache_dir)
    enricher = ProductEnricher(api, importer, logger=log)

    log.info("Importing from Mercado Libre...")
    results = await enricher.enrich_all(catalog.products)

    for result in results:
        if result.product is not None:
            run.products.append(result.product)
        else:
            run.failures.append(result)
    if run.failures:
        log.warning(
            "%d of %d products could not be imported: %s",
            len(run.failures),
            len(results),
            ", ".join(f.product_id for f in run.failures),
        )

    log.info("%d products imported. Creating nodes...", len(run.products))

    filters_node = factory.create_filters_node(catalog.taxonomy)
    create_node(filters_node)
    run.nodes.append(filters_node)

    for product in run.products:
        node = factory.process_product(product)
        create_node(node)
        run.nodes.append(node)
