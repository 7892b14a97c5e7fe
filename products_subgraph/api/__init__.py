"""
GraphQL API layer for the products subgraph.

This package contains:
- types.py: GraphQL type definitions and entity reference resolvers
- schema.py: Query/Mutation roots and the guarded federation schema
"""

from .schema import build_schema

__all__ = ["build_schema"]
