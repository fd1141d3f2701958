"""Fixed per-route-class access rules."""

from enum import Enum


class RouteClass(str, Enum):
    HEALTH = "HEALTH"
    AUTH = "AUTH"
    CONTACT_FORM = "CONTACT_FORM"
    RESOURCE = "RESOURCE"
    ADMIN = "ADMIN"


class AccessLevel(str, Enum):
    PUBLIC = "PUBLIC"
    AUTHENTICATED = "AUTHENTICATED"
    ADMIN = "ADMIN"


SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})

_ACCESS_RULES: dict[RouteClass, tuple[AccessLevel, AccessLevel]] = {
    # (safe methods, mutating methods)
    RouteClass.HEALTH: (AccessLevel.PUBLIC, AccessLevel.PUBLIC),
    RouteClass.AUTH: (AccessLevel.PUBLIC, AccessLevel.PUBLIC),
    RouteClass.CONTACT_FORM: (AccessLevel.PUBLIC, AccessLevel.PUBLIC),
    RouteClass.RESOURCE: (AccessLevel.PUBLIC, AccessLevel.AUTHENTICATED),
    RouteClass.ADMIN: (AccessLevel.ADMIN, AccessLevel.ADMIN),
}


def required_access(route_class: RouteClass, method: str) -> AccessLevel:
    """Return the access level a request needs before its handler may run."""
    safe_level, mutating_level = _ACCESS_RULES[route_class]
    if method.upper() in SAFE_METHODS:
        return safe_level
    return mutating_level
