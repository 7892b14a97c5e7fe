"""
Product Catalog - In-memory product, variation and creator lookup.

Holds the mock data served by the subgraph. Nothing is persisted; a catalog
lives as long as the process that created it.
"""

import asyncio

from products_subgraph.models import ProductRecord, VariationRecord, CreatorRecord

DEFAULT_VARIATION = VariationRecord(id="defaultVariation", name="default variation")


def default_products() -> list[ProductRecord]:
    return [
        ProductRecord(id="converse-1", sku="converse-1", package="converse", name="Converse Chuck Taylor", old_field="deprecated"),
        ProductRecord(id="vans-1", sku="vans-1", package="vans", name="Vans Classic Sneaker", old_field="deprecated"),
    ]


def default_variations() -> dict[str, VariationRecord]:
    return {
        "converse-1": VariationRecord(id="converse-classic", name="Converse Chuck Taylor"),
        "vans-1": VariationRecord(id="vans-classic", name="Vans Classic Sneaker"),
    }


def default_creators() -> dict[str, CreatorRecord]:
    return {
        "converse-1": CreatorRecord(email="info@converse.com", total_products_created=1099),
        "vans-1": CreatorRecord(email="info@vans.com", total_products_created=1099),
    }


class ProductCatalog():
    def __init__(self,
                 products: list[ProductRecord] | None = None,
                 variations: dict[str, VariationRecord] | None = None,
                 creators: dict[str, CreatorRecord] | None = None,
                 variation_latency: float = 0.0):
        """Initialize ProductCatalog, seeded with the default mock data unless given"""
        self.products: list[ProductRecord] = default_products() if products is None else products
        self.variations: dict[str, VariationRecord] = default_variations() if variations is None else variations
        self.creators: dict[str, CreatorRecord] = default_creators() if creators is None else creators
        self.variation_latency = variation_latency

    def get_products(self) -> list[ProductRecord]:
        return list(self.products)

    def get_product(self, id: str) -> ProductRecord | None:
        return next((p for p in self.products if p.id == id), None)

    def get_product_by_sku(self, sku: str, package: str) -> ProductRecord | None:
        return next((p for p in self.products if p.sku == sku and p.package == package), None)

    async def get_variation(self, product_id: str | None) -> VariationRecord:
        """Variation lookup is slow on purpose, to exercise deferred resolution at the gateway"""
        if self.variation_latency > 0:
            await asyncio.sleep(self.variation_latency)
        if product_id and product_id in self.variations:
            return self.variations[product_id]
        return DEFAULT_VARIATION

    def get_creator(self, product_id: str | None) -> CreatorRecord | None:
        if not product_id:
            return None
        return self.creators.get(product_id)

    def get_creator_by_email(self, email: str) -> CreatorRecord | None:
        return next((c for c in self.creators.values() if c.email == email), None)

    def rename_product(self, product: ProductRecord, name: str) -> str:
        product.name = name
        return product.name
