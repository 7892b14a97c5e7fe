"""
Schema transform guarding @authz-annotated fields.

Walks a built schema once at startup. Every object field that carries the
directive, or whose declaring type carries it, gets its resolver replaced by
a guard that asks the authorizer before delegating to the original resolver.

Resource id selection for a guarded field on type T with effective
`resource` R (R defaults to T):
- R == T: the field's `id` argument, else the parent object's `id`
- R != T: `context[R].id`, written into the request context by a resolver
  that ran earlier in the same request (e.g. Mutation.product)
Neither source yielding an id fails the field with ResourceIdMissing.
"""
from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Mapping
from functools import wraps
from typing import Any, Callable

import strawberry
from graphql import (
    GraphQLField,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    default_field_resolver,
    get_directive_values,
)
from loguru import logger
from strawberry.schema.schema_converter import GraphQLCoreConverter

from products_subgraph.authz.authorizer import Authorizer
from products_subgraph.authz.directive import AUTHZ_DIRECTIVE_NAME
from products_subgraph.authz.errors import (
    AuthenticationRequired,
    AuthorizationDenied,
    ResourceContextMissing,
    ResourceIdMissing,
)

USER_TYPE = "User"


def _context_get(context: Any, key: str) -> Any:
    if isinstance(context, Mapping):
        return context.get(key)
    return getattr(context, key, None)


def _lookup_id(value: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get("id")
    return getattr(value, "id", None)


def _strawberry_directive_args(element: GraphQLNamedType | GraphQLField, directive_name: str) -> dict[str, Any] | None:
    """Arguments of a directive declared code-first on a strawberry type or field"""
    definition = (element.extensions or {}).get(GraphQLCoreConverter.DEFINITION_BACKREF)
    for directive in getattr(definition, "directives", None) or ():
        directive_def = getattr(directive, "__strawberry_directive__", None)
        if directive_def is None:
            continue
        name = directive_def.graphql_name or directive_def.python_name[:1].lower() + directive_def.python_name[1:]
        if name == directive_name:
            return {f.name: getattr(directive, f.name) for f in dataclasses.fields(directive)}
    return None


def get_directive_args(schema: GraphQLSchema, element: GraphQLNamedType | GraphQLField, directive_name: str) -> dict[str, Any] | None:
    """
    Look up the first `directive_name` annotation on a type or field.

    Strawberry definitions are checked first, then the SDL AST nodes (for
    schemas built with graphql.build_schema).

    Returns:
        The directive's arguments, or None if the element is not annotated
    """
    args = _strawberry_directive_args(element, directive_name)
    if args is not None:
        return args

    directive_def = schema.get_directive(directive_name)
    if directive_def is None:
        return None
    nodes = (element.ast_node, *(getattr(element, "extension_ast_nodes", None) or ()))
    for node in nodes:
        if node is None:
            continue
        values = get_directive_values(directive_def, node)
        if values is not None:
            return values
    return None


def guard_resolver(resolve: Callable[..., Any], authorizer: Authorizer, type_name: str,
                   permission: str, resource: str | None = None) -> Callable[..., Any]:
    """
    Wrap a graphql-core resolver `(source, info, **args)` with a permission check.

    Args:
        resolve: Original resolver, called unchanged once the check passes
        authorizer: Decision client
        type_name: Name of the type declaring the field
        permission: Permission required on the resource
        resource: Resource type to check; defaults to `type_name`

    Returns:
        Async resolver raising AuthenticationRequired, ResourceContextMissing,
        ResourceIdMissing or AuthorizationDenied instead of calling `resolve`
    """
    resource_type = resource or type_name

    @wraps(resolve)
    async def guarded(source: Any, info: Any, **args: Any) -> Any:
        context = info.context
        user_id = _context_get(context, "user_id")
        if not user_id:
            logger.info("Unauthenticated access to {}.{}", type_name, info.field_name)
            raise AuthenticationRequired()

        if resource_type == type_name:
            resource_id = args.get("id")
            if resource_id is None:
                resource_id = _lookup_id(source)
        else:
            dependent = _context_get(context, resource_type)
            if dependent is None:
                raise ResourceContextMissing(resource_type)
            resource_id = _lookup_id(dependent)
        if resource_id is None:
            logger.info("No {} id for {}.{}", resource_type, type_name, info.field_name)
            raise ResourceIdMissing(resource_type)

        actor = {"type": USER_TYPE, "id": user_id}
        target = {"type": resource_type, "id": resource_id}
        if not await authorizer.authorize(actor, permission, target):
            logger.info("Denied {} {} on {}:{} for {}.{}", user_id, permission, resource_type, resource_id, type_name, info.field_name)
            raise AuthorizationDenied(actor, permission, target)
        logger.debug("Allowed {} {} on {}:{} for {}.{}", user_id, permission, resource_type, resource_id, type_name, info.field_name)

        result = resolve(source, info, **args)
        if inspect.isawaitable(result):
            return await result
        return result

    return guarded


def authz_directive_transformer(schema: strawberry.Schema | GraphQLSchema, authorizer: Authorizer,
                                directive_name: str = AUTHZ_DIRECTIVE_NAME):
    """
    Guard every object field annotated (directly or through its type) with `directive_name`.

    Resolvers of unannotated fields are left untouched. Guarded fields have
    their `resolve` replaced in place; the schema is returned for chaining.
    """
    graphql_schema = schema._schema if isinstance(schema, strawberry.Schema) else schema

    # Pass 1: type-level annotations, used as fallback for unannotated fields
    type_directive_args: dict[str, dict[str, Any]] = {}
    for type_name, named_type in graphql_schema.type_map.items():
        if type_name.startswith("__"):
            continue
        args = get_directive_args(graphql_schema, named_type, directive_name)
        if args is not None:
            type_directive_args[type_name] = args

    # Pass 2: object fields
    guarded_fields: list[str] = []
    for type_name, named_type in graphql_schema.type_map.items():
        if type_name.startswith("__") or not isinstance(named_type, GraphQLObjectType):
            continue
        for field_name, field in named_type.fields.items():
            args = get_directive_args(graphql_schema, field, directive_name)
            if args is None:
                args = type_directive_args.get(type_name)
            if args is None:
                continue
            field.resolve = guard_resolver(
                field.resolve or default_field_resolver,
                authorizer,
                type_name,
                args["permission"],
                args.get("resource"),
            )
            guarded_fields.append(f"{type_name}.{field_name}")

    logger.info("@{} guards {} fields: {}", directive_name, len(guarded_fields), ", ".join(guarded_fields))
    return schema
