"""
The @authz schema directive.

    directive @authz(permission: String!, resource: String) on OBJECT | FIELD_DEFINITION

It has no runtime effect of its own; authz_directive_transformer reads it
and guards the annotated fields.
"""
from __future__ import annotations

import strawberry
from strawberry.schema_directive import Location

AUTHZ_DIRECTIVE_NAME = "authz"


@strawberry.schema_directive(
    locations=[Location.OBJECT, Location.FIELD_DEFINITION],
    name=AUTHZ_DIRECTIVE_NAME,
    description="Require `permission` on `resource` (defaults to the declaring type) to resolve a field",
)
class Authz:
    permission: str
    resource: str | None = None
