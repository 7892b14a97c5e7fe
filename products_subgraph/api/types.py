"""
GraphQL type definitions for the products subgraph.

These @strawberry types mirror the dataclasses in models.py.
The dataclasses hold the catalog data, while these are exposed via GraphQL.
"""
from __future__ import annotations
import strawberry
from typing import TYPE_CHECKING

from products_subgraph.authz.directive import Authz
from products_subgraph.models import ProductRecord, VariationRecord, CreatorRecord

if TYPE_CHECKING:
    from products_subgraph.catalog import ProductCatalog


@strawberry.type
class ProductVariation:
    id: strawberry.ID
    name: str | None

    @classmethod
    def from_record(cls, record: VariationRecord) -> ProductVariation:
        return cls(id=record.id, name=record.name)


@strawberry.federation.type(shareable=True)
class ProductDimension:
    size: str | None
    weight: float | None


@strawberry.federation.type(keys=["email"])
class User:
    """Product creator, owned by the users subgraph"""
    email: strawberry.ID
    total_products_created: int | None = strawberry.federation.field(shareable=True, default=None)

    @classmethod
    def from_record(cls, record: CreatorRecord) -> User:
        return cls(email=record.email, total_products_created=record.total_products_created)

    @classmethod
    def resolve_reference(cls, info: strawberry.types.Info, email: strawberry.ID) -> User:
        catalog: ProductCatalog = info.context["catalog"]
        record = catalog.get_creator_by_email(email)
        if record is None:
            return cls(email=email)
        return cls.from_record(record)


@strawberry.federation.interface
class SkuItf:
    sku: str | None


@strawberry.federation.interface
class ProductItf(SkuItf):
    id: strawberry.ID
    package: str | None
    name: str | None
    old_field: str | None = strawberry.field(default=None, deprecation_reason="refactored out")
    hidden: str | None = strawberry.federation.field(default=None, inaccessible=True)

    @strawberry.field
    async def variation(self, info: strawberry.types.Info) -> ProductVariation | None:
        catalog: ProductCatalog = info.context["catalog"]
        return ProductVariation.from_record(await catalog.get_variation(self.id))

    @strawberry.field
    def dimensions(self) -> ProductDimension | None:
        return ProductDimension(size="1", weight=1)

    @strawberry.field
    def created_by(self, info: strawberry.types.Info) -> User | None:
        catalog: ProductCatalog = info.context["catalog"]
        record = catalog.get_creator(self.id)
        if record is None:
            return None
        return User.from_record(record)


@strawberry.federation.type(keys=["id", "sku package"], directives=[Authz(permission="read")])
class Product(ProductItf):
    """Every Product field requires `read` on the product itself"""

    @strawberry.federation.field(shareable=True, override="reviews")
    def reviews_score(self) -> float:
        return 4.5

    @classmethod
    def from_record(cls, record: ProductRecord) -> Product:
        return cls(
            id=record.id,
            sku=record.sku,
            package=record.package,
            name=record.name,
            old_field=record.old_field,
        )

    @classmethod
    def resolve_reference(cls, info: strawberry.types.Info, **representation) -> Product | None:
        """Resolve by `id`, or by `sku` + `package`. Unknown references resolve to null."""
        catalog: ProductCatalog = info.context["catalog"]
        if representation.get("id"):
            record = catalog.get_product(representation["id"])
        elif representation.get("sku") and representation.get("package"):
            record = catalog.get_product_by_sku(representation["sku"], representation["package"])
        else:
            record = None
        if record is None:
            return None
        return cls.from_record(record)


@strawberry.type
class ProductMutation:
    """Mutations on one product, selected by Mutation.product"""
    # Private variables
    product: strawberry.Private[ProductRecord]

    @strawberry.field(directives=[Authz(permission="edit", resource="Product")])
    def change_name(self, info: strawberry.types.Info, name: str) -> str | None:
        catalog: ProductCatalog = info.context["catalog"]
        return catalog.rename_product(self.product, name)
