"""
Authorization decision clients.

An authorizer answers `authorize(actor, action, resource) -> bool` where actor
and resource are typed references such as {"type": "User", "id": "alice"}.

Usage:
    authorizer = OsoCloudAuthorizer("https://cloud.osohq.com", api_key)
    allowed = await authorizer.authorize(
        {"type": "User", "id": "alice"}, "read", {"type": "Product", "id": "converse-1"}
    )
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, Protocol

from loguru import logger
from oso_cloud import Oso, Value

from config.authz_grants import GrantDict


class Authorizer(Protocol):
    async def authorize(self, actor: dict[str, Any], action: str, resource: dict[str, Any]) -> bool:
        ...

    async def close(self) -> None:
        ...


def _entity_id(ref: dict[str, Any]) -> str | None:
    """Entity ids compare as strings; a missing id stays None."""
    entity_id = ref.get("id")
    return None if entity_id is None else str(entity_id)


class OsoCloudAuthorizer:
    """
    Oso Cloud decision client.

    Each call is one `Oso.authorize` request; nothing is cached. The SDK is
    blocking, so calls run in a worker thread. SDK errors propagate to the
    caller unchanged.
    """

    def __init__(self, url: str, api_key: str):
        """
        Initialize Oso Cloud client.

        Args:
            url: Oso Cloud base URL (e.g., "https://cloud.osohq.com")
            api_key: Oso Cloud API key
        """
        self.url = url
        self.oso = Oso(url=url, api_key=api_key)

    async def close(self) -> None:
        """Nothing to release; the SDK holds no per-instance connection."""

    async def authorize(self, actor: dict[str, Any], action: str, resource: dict[str, Any]) -> bool:
        return await asyncio.to_thread(
            self.oso.authorize,
            Value(actor["type"], _entity_id(actor)),
            action,
            Value(resource["type"], _entity_id(resource)),
        )


class GrantAuthorizer:
    """Allows exactly the (actor, action, resource) triples it was given"""

    def __init__(self, grants: Iterable[GrantDict]):
        self.grants: set[tuple[str, str, str, str, str]] = set()
        for g in grants:
            actor_id, resource_id = _entity_id(g["actor"]), _entity_id(g["resource"])
            if actor_id is None or resource_id is None:
                logger.warning("Skipping grant without an id: {}", g)
                continue
            self.grants.add((g["actor"]["type"], actor_id, g["action"], g["resource"]["type"], resource_id))
        logger.info("Loaded {} authorization grants", len(self.grants))

    async def authorize(self, actor: dict[str, Any], action: str, resource: dict[str, Any]) -> bool:
        actor_id, resource_id = _entity_id(actor), _entity_id(resource)
        if actor_id is None or resource_id is None:
            return False
        return (actor["type"], actor_id, action, resource["type"], resource_id) in self.grants

    async def close(self) -> None:
        pass
