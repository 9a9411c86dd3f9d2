"""Role checks for workbench actions."""

from typing import Optional

from glrecon.domain.entities import Role, User
from glrecon.domain.errors import AuthorizationError, role_required

ROLE_HIERARCHY: dict[Role, int] = {
    Role.ADMIN: 3,
    Role.MANAGER: 2,
    Role.JUNIOR: 1,
}


def has_min_role(user_role: Role, required_role: Role) -> bool:
    """Return True if user_role is at or above required_role."""
    return ROLE_HIERARCHY[Role(user_role)] >= ROLE_HIERARCHY[Role(required_role)]


def require_role(actor: Optional[User], minimum_role: Role) -> User:
    """Ensure an authenticated actor holds at least minimum_role.

    Args:
        actor: Current user, or None when unauthenticated
        minimum_role: Lowest role allowed

    Returns:
        The actor, for convenience

    Raises:
        AuthorizationError: If there is no actor or its role is too low
    """
    if actor is None or not has_min_role(actor.role, minimum_role):
        raise AuthorizationError(role_required(Role(minimum_role).value))
    return actor
