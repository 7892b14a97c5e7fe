"""
Field authorization for the products subgraph.

This package contains:
- directive.py: the @authz schema directive
- authorizer.py: decision clients (Oso Cloud, local grant table)
- transformer.py: schema transform wrapping annotated resolvers
- errors.py: failures raised by guarded resolvers
"""

from .authorizer import Authorizer, GrantAuthorizer, OsoCloudAuthorizer
from .directive import Authz
from .errors import (
    AuthenticationRequired,
    AuthorizationDenied,
    AuthzError,
    ResourceContextMissing,
    ResourceIdMissing,
)
from .transformer import authz_directive_transformer

__all__ = [
    "Authorizer",
    "Authz",
    "AuthenticationRequired",
    "AuthorizationDenied",
    "AuthzError",
    "GrantAuthorizer",
    "OsoCloudAuthorizer",
    "ResourceContextMissing",
    "ResourceIdMissing",
    "authz_directive_transformer",
]
