"""
Authorization grant table loader.

Reads the grants used by the local authorization backend from a YAML file.
"""

import yaml
from pathlib import Path
from typing import TypedDict


class EntityRefDict(TypedDict):
    """A typed entity reference, e.g. {"type": "User", "id": "alice"}"""
    type: str
    id: str


class GrantDict(TypedDict):
    """Type definition for one grant entry"""
    actor: EntityRefDict
    action: str
    resource: EntityRefDict


def load_grants(grants_path: str | None = None) -> list[GrantDict]:
    """
    Load authorization grants from YAML file.

    Args:
        grants_path: Path to the grants file. If None, uses default location.

    Returns:
        List of grants, each allowing one (actor, action, resource) triple
    """
    if grants_path is None:
        # Default to config/authz_grants.yaml
        config_dir = Path(__file__).parent
        grants_path = config_dir / "authz_grants.yaml"
    else:
        grants_path = Path(grants_path)

    if not grants_path.exists():
        raise FileNotFoundError(f"Authorization grants file not found: {grants_path}")

    with open(grants_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    return config.get('grants', [])
