from __future__ import annotations

import pytest

from products_subgraph.catalog import DEFAULT_VARIATION, ProductCatalog
from products_subgraph.models import ProductRecord


@pytest.fixture
def catalog():
    return ProductCatalog(variation_latency=0)


class TestProductLookup:
    def test_default_products(self, catalog):
        assert [p.id for p in catalog.get_products()] == ["converse-1", "vans-1"]

    def test_get_product(self, catalog):
        assert catalog.get_product("vans-1").name == "Vans Classic Sneaker"
        assert catalog.get_product("rover") is None

    def test_get_product_by_sku(self, catalog):
        assert catalog.get_product_by_sku("converse-1", "converse").id == "converse-1"
        assert catalog.get_product_by_sku("converse-1", "vans") is None

    def test_catalogs_do_not_share_records(self):
        first, second = ProductCatalog(), ProductCatalog()
        first.rename_product(first.get_product("converse-1"), "Renamed")
        assert second.get_product("converse-1").name == "Converse Chuck Taylor"

    def test_custom_products(self):
        catalog = ProductCatalog(products=[ProductRecord(id="p", sku=None, package=None, name="P")])
        assert [p.id for p in catalog.get_products()] == ["p"]


class TestRelatedLookup:
    @pytest.mark.asyncio
    async def test_variation(self, catalog):
        variation = await catalog.get_variation("vans-1")
        assert variation.id == "vans-classic"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("product_id", [None, "", "rover"])
    async def test_default_variation(self, catalog, product_id):
        assert await catalog.get_variation(product_id) is DEFAULT_VARIATION

    def test_creator(self, catalog):
        assert catalog.get_creator("converse-1").email == "info@converse.com"
        assert catalog.get_creator(None) is None
        assert catalog.get_creator("rover") is None

    def test_creator_by_email(self, catalog):
        assert catalog.get_creator_by_email("info@vans.com").total_products_created == 1099
        assert catalog.get_creator_by_email("nobody@example.com") is None


class TestRename:
    def test_rename_updates_record(self, catalog):
        record = catalog.get_product("vans-1")
        assert catalog.rename_product(record, "Old Skool") == "Old Skool"
        assert catalog.get_product("vans-1").name == "Old Skool"
