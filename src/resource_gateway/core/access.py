"""Ownership checks for owner-scoped resources.

Every route that reads or writes a single owner-scoped record goes through
``authorize_owner``. Existence is checked before ownership, so a caller can
tell "does not exist" (404) from "not yours" (403), never the record itself.
"""

import logging
from typing import Protocol, TypeVar

from resource_gateway.exceptions import AccessDenied, NotFound
from resource_gateway.models import User

logger = logging.getLogger(__name__)


class OwnedResource(Protocol):
    id: int
    owner_id: int


R = TypeVar("R", bound=OwnedResource)


def can_access(identity: User, resource: OwnedResource) -> bool:
    """Privileged roles see everything; everyone else sees only what they own."""
    return identity.is_privileged or resource.owner_id == identity.id


def authorize_owner(
    identity: User,
    resource: R | None,
    *,
    kind: str = "Resource",
) -> R:
    """Return resource if identity may access it.

    Args:
        identity: The caller resolved by the identity middleware.
        resource: The looked-up record, or None if the lookup missed.
        kind: Human-readable resource name for error messages ("Order").

    Raises:
        NotFound: If resource is None.
        AccessDenied: If identity neither owns resource nor holds a privileged role.
    """
    if resource is None:
        raise NotFound(f"{kind} not found")

    if not can_access(identity, resource):
        logger.warning(
            "Access denied",
            extra={
                "kind": kind,
                "resource_id": resource.id,
                "user_id": identity.id,
                "role": identity.role,
            },
        )
        raise AccessDenied(f"Access Denied: You do not own this {kind.lower()}.")

    return resource
