"""
Exceptions raised by guarded field resolvers.

graphql-core turns these into field errors; sibling fields still resolve.
Errors raised by the decision backend itself are not wrapped here.
"""

from __future__ import annotations

from typing import Any


class AuthzError(Exception):
    """Base exception for field authorization failures."""
    pass


class AuthenticationRequired(AuthzError):
    """Raised when the request context carries no user id."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class AuthorizationDenied(AuthzError):
    """Raised when the decision backend refuses the permission."""

    def __init__(self, actor: dict[str, Any], permission: str, resource: dict[str, Any]):
        self.actor = actor
        self.permission = permission
        self.resource = resource
        super().__init__(f"Not allowed to {permission} {resource['type']} '{resource['id']}'")


class ResourceContextMissing(AuthzError):
    """Raised when a dependent-resource check finds no context entry for the resource."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(f"No '{resource_type}' in request context to authorize against")


class ResourceIdMissing(AuthzError):
    """Raised when neither the field arguments nor the resolved object provide a resource id."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(f"No '{resource_type}' id to authorize against")
