# src/models/product.py

"""Product data models passed between the catalog and enrichment stages."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ProductSummary:
    """A single search hit: the marketplace id plus the raw result fields."""

    id: str
    raw: dict[str, Any] = field(default_factory=lambda: dict[str, Any]())

    @classmethod
    def from_api(cls, hit: dict[str, Any]) -> "ProductSummary":
        """Parse one entry of the search response's ``results`` array."""
        return cls(id=str(hit["id"]), raw=hit)


@dataclass
class ProductDetail:
    """Full ``/items/{id}`` record."""

    id: str
    title: str = ""
    price: float = 0.0
    currency_id: str = ""
    permalink: str = ""
    attributes: list[dict[str, Any]] = field(
        default_factory=lambda: list[dict[str, Any]]()
    )
    pictures: list[dict[str, Any]] = field(
        default_factory=lambda: list[dict[str, Any]]()
    )
    raw: dict[str, Any] = field(default_factory=lambda: dict[str, Any]())

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ProductDetail":
        """Parse an item payload, keeping the raw dict for node fields."""
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            price=float(data.get("price") or 0),
            currency_id=str(data.get("currency_id") or ""),
            permalink=str(data.get("permalink") or ""),
            attributes=list(data.get("attributes") or []),
            pictures=list(data.get("pictures") or []),
            raw=data,
        )


@dataclass
class EnrichedProduct:
    """A product detail merged with description, images and thumbnail.

    ``item_id`` always carries the marketplace identifier; the host
    overwrites ``id`` with its own node id.
    """

    detail: ProductDetail
    item_id: str
    item_description: str | None = None
    item_images: list[str] = field(default_factory=lambda: list[str]())
    item_thumbnail: str | None = None

    def to_fields(self) -> dict[str, Any]:
        """Flatten into the field set stored on the product node."""
        fields = {
            k: v for k, v in self.detail.raw.items() if k != "id"
        }
        fields.update(
            {
                "itemID": self.item_id,
                "itemDescription": self.item_description,
                "itemImages": list(self.item_images),
                "itemThumbnail": self.item_thumbnail,
            }
        )
        return fields


@dataclass
class FilterTaxonomy:
    """Seller-level facet metadata returned alongside the search results."""

    site_id: str
    username: str
    available_filters: list[dict[str, Any]] = field(
        default_factory=lambda: list[dict[str, Any]]()
    )
    applied_filters: list[dict[str, Any]] = field(
        default_factory=lambda: list[dict[str, Any]]()
    )


@dataclass
class Catalog:
    """Output of the catalog stage."""

    products: list[ProductSummary]
    taxonomy: FilterTaxonomy
    total: int = 0


@dataclass
class EnrichmentResult:
    """Outcome of enriching one product: a product or an error, never both."""

    product_id: str
    product: EnrichedProduct | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when enrichment produced a product."""
        return self.product is not None
