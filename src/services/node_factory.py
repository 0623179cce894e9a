# src/services/node_factory.py

"""Reshape enriched products and seller filters into host nodes."""

from collections.abc import Callable
from typing import Any

from src.config.settings import Settings
from src.models.node import Node
from src.models.product import EnrichedProduct, FilterTaxonomy


class NodeFactory:
    """Builds nodes using the host's id and digest helpers.

    Node ids are seeded from marketplace data only (item id, site and
    seller), so repeated runs over the same catalog yield the same ids.
    """

    def __init__(
        self,
        create_node_id: Callable[[str], str],
        create_content_digest: Callable[[Any], str],
    ) -> None:
        self.settings = Settings()
        self._create_node_id = create_node_id
        self._create_content_digest = create_content_digest

    def _build(self, seed: str, node_type: str, fields: dict[str, Any]) -> Node:
        return Node(
            id=self._create_node_id(seed),
            type=node_type,
            fields=fields,
            content_digest=self._create_content_digest(fields),
        )

    def process_product(self, product: EnrichedProduct) -> Node:
        """Build the ``MercadoLibreProduct`` node for one product."""
        node_type = self.settings.PRODUCT_NODE_TYPE
        return self._build(
            f"{node_type}-{product.item_id}",
            node_type,
            product.to_fields(),
        )

    def create_filters_node(self, taxonomy: FilterTaxonomy) -> Node:
        """Build the single ``MercadoLibreFilters`` node for a seller."""
        node_type = self.settings.FILTERS_NODE_TYPE
        fields: dict[str, Any] = {
            "siteId": taxonomy.site_id,
            "seller": taxonomy.username,
            "filters": taxonomy.available_filters,
            "appliedFilters": taxonomy.applied_filters,
        }
        return self._build(
            f"{node_type}-{taxonomy.site_id}-{taxonomy.username}",
            node_type,
            fields,
        )

    def create_file_node(self, url: str, fields: dict[str, Any]) -> Node:
        """Build a ``File`` node for a downloaded picture.

        Pictures can be shared by several listings, so the node only
        describes the file and never the product that imported it.
        """
        node_type = self.settings.FILE_NODE_TYPE
        return self._build(
            f"{node_type}-{url}",
            node_type,
            {"url": url, **fields},
        )
