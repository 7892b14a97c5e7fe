"""
Shared data models for the products subgraph.

These are plain Python dataclasses holding the mock catalog data.
The GraphQL layer wraps them with @strawberry types for API exposure.
"""

from dataclasses import dataclass


@dataclass
class VariationRecord:
    """A product variation"""
    id: str
    name: str | None


@dataclass
class CreatorRecord:
    """The user that created a product"""
    email: str
    total_products_created: int | None


@dataclass
class ProductRecord:
    """
    A product in the catalog.

    Records are mutable: ProductMutation.changeName edits `name` in place,
    so every later read of the same catalog sees the new value.
    """
    id: str
    sku: str | None
    package: str | None
    name: str | None
    old_field: str | None = None
