"""
Combined GraphQL schema for the products subgraph.

This module combines the query and mutation roots into a single Strawberry
federation schema and guards its @authz fields for use with FastAPI.
"""
from __future__ import annotations
import strawberry
from typing import TYPE_CHECKING, Sequence

from products_subgraph.api.types import Product, ProductItf, ProductMutation
from products_subgraph.authz.authorizer import Authorizer
from products_subgraph.authz.transformer import authz_directive_transformer

if TYPE_CHECKING:
    from products_subgraph.catalog import ProductCatalog


@strawberry.type
class Query:

    @strawberry.field
    def all_products(self, info: strawberry.types.Info) -> list[ProductItf | None] | None:
        """Get all products in the catalog."""
        catalog: ProductCatalog = info.context["catalog"]
        return [Product.from_record(p) for p in catalog.get_products()]

    @strawberry.field
    def product(self, info: strawberry.types.Info, id: strawberry.ID) -> ProductItf | None:
        """Get a specific product by id."""
        catalog: ProductCatalog = info.context["catalog"]
        record = catalog.get_product(id)
        if record is None:
            return None
        return Product.from_record(record)


@strawberry.type
class Mutation:

    @strawberry.mutation
    def product(self, info: strawberry.types.Info, id: strawberry.ID) -> ProductMutation | None:
        """
        Select a product to mutate.

        Stores the product under context["Product"]; the @authz guard of
        ProductMutation.changeName reads the product id from there.
        """
        catalog: ProductCatalog = info.context["catalog"]
        record = catalog.get_product(id)
        if record is None:
            return None
        info.context["Product"] = record
        return ProductMutation(product=record)


def build_schema(authorizer: Authorizer, extensions: Sequence = ()) -> strawberry.federation.Schema:
    """Create the federation schema with @authz fields guarded by `authorizer`."""
    schema = strawberry.federation.Schema(
        query=Query,
        mutation=Mutation,
        types=[Product],
        extensions=list(extensions),
        enable_federation_2=True,
    )
    return authz_directive_transformer(schema, authorizer)
