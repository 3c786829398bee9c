"""Role-based capabilities for shared itineraries."""

from enum import StrEnum

from app.errors.share import PermissionDeniedError
from app.schemas.share import SharedItinerary


class ShareRole(StrEnum):
    """Who is looking at an itinerary."""

    OWNER = "owner"
    COLLABORATOR = "collaborator"
    VIEWER = "viewer"


class Capability(StrEnum):
    """Actions gated by role."""

    VIEW = "view"
    EDIT = "edit"
    COMMENT = "comment"
    MANAGE_SHARE = "manage_share"
    RESOLVE_COMMENT = "resolve_comment"
    DELETE_ANY_COMMENT = "delete_any_comment"


# Role-capability mapping: the whole permission matrix lives here
ROLE_CAPABILITIES: dict[ShareRole, frozenset[Capability]] = {
    ShareRole.OWNER: frozenset(Capability),
    ShareRole.COLLABORATOR: frozenset(
        {
            Capability.VIEW,
            Capability.EDIT,
            Capability.COMMENT,
        },
    ),
    ShareRole.VIEWER: frozenset({Capability.VIEW}),
}


def role_for(share: SharedItinerary, user_id: str | None) -> ShareRole:
    """
    Derive the caller's role on a share.

    Args:
        share: The share being accessed.
        user_id: Opaque id of the caller, or None for anonymous access.

    Returns:
        OWNER when the caller created the share, COLLABORATOR when the share
        is in collaborate mode, VIEWER otherwise.
    """
    if user_id is not None and user_id == share.user_id:
        return ShareRole.OWNER
    if share.share_mode == "collaborate":
        return ShareRole.COLLABORATOR
    return ShareRole.VIEWER


def can(role: ShareRole, capability: Capability) -> bool:
    """Check whether a role grants a capability."""
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def require(role: ShareRole, capability: Capability) -> None:
    """
    Raise unless the role grants the capability.

    Raises:
        PermissionDeniedError: If ``role`` lacks ``capability``.
    """
    if not can(role, capability):
        detail = f"Role '{role}' is not allowed to {capability.replace('_', ' ')}"
        raise PermissionDeniedError(detail=detail)
