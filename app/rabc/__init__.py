"""Share roles and capability checks."""

from app.rabc.permissions import (
    ROLE_CAPABILITIES,
    Capability,
    ShareRole,
    can,
    require,
    role_for,
)

__all__ = [
    "Capability",
    "ROLE_CAPABILITIES",
    "ShareRole",
    "can",
    "require",
    "role_for",
]
