"""
Products Subgraph - Federated GraphQL product catalog

A single Apollo Federation subgraph with:
- GraphQL API for product queries and mutations
- Entity reference resolution for the gateway
- Directive-driven (@authz) field authorization backed by Oso Cloud
"""

__version__ = "0.1.0"
