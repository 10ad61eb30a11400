# turfbook/access/roles.py
"""
Role hierarchy and per-role navigation paths.

One static table drives both access checks and path helpers. Roles are
compared case-insensitively ("turfAdmin" == "turfadmin").
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

SUPERADMIN = "superadmin"
ADMIN = "admin"
TURFADMIN = "turfadmin"
USER = "user"

# role → roles it may act as (always including itself)
ROLE_HIERARCHY: Mapping[str, frozenset[str]] = MappingProxyType({
    SUPERADMIN: frozenset({SUPERADMIN, ADMIN, TURFADMIN, USER}),
    ADMIN: frozenset({ADMIN, TURFADMIN, USER}),
    TURFADMIN: frozenset({TURFADMIN, USER}),
    USER: frozenset({USER}),
})

LOGIN_PATH = "/login"
HOME_PATH = "/"

DEFAULT_PATHS: Mapping[str, str] = MappingProxyType({
    USER: "/user/dashboard",
    TURFADMIN: "/turfadmin/dashboard",
    ADMIN: "/admin/dashboard",
})

# Roles with their own path prefix ("/user/...", "/turfadmin/...", "/admin/...")
PATH_PREFIXES: Mapping[str, str] = MappingProxyType({
    USER: "user",
    TURFADMIN: "turfadmin",
    ADMIN: "admin",
})


def normalize_role(role: Optional[str]) -> Optional[str]:
    if not isinstance(role, str) or not role.strip():
        return None
    return role.strip().lower()


def included_roles(role: Optional[str]) -> frozenset[str]:
    """Roles `role` may act as; empty for unknown roles."""
    return ROLE_HIERARCHY.get(normalize_role(role), frozenset())


def has_access(
    user_role: Optional[str],
    required_role: Optional[str | Iterable[str]],
    use_hierarchy: bool = True,
) -> bool:
    """
    Whether `user_role` satisfies `required_role`.

    A list of required roles is satisfied by any one of them. With
    `use_hierarchy` a role also satisfies every role it includes;
    without it the match must be exact (case-insensitive).
    """
    role = normalize_role(user_role)
    if role is None or required_role is None:
        return False

    if isinstance(required_role, str):
        required = [required_role]
    elif isinstance(required_role, (list, tuple, set, frozenset)):
        required = list(required_role)
    else:
        return False

    for wanted in required:
        wanted = normalize_role(wanted)
        if wanted is None:
            continue
        if use_hierarchy:
            if wanted in included_roles(role):
                return True
        elif wanted == role:
            return True
    return False


def resolve_default_path(role: Optional[str]) -> str:
    """Landing path of a role; "/login" without a role, "/" for unknown roles."""
    role = normalize_role(role)
    if role is None:
        return LOGIN_PATH
    return DEFAULT_PATHS.get(role, HOME_PATH)


def remap_path_for_role(intended_path: Optional[str], role: Optional[str]) -> str:
    """
    Where to send `role` after it was refused `intended_path`.

    user → turfadmin pages are rewritten to the matching /user/ page and
    turfadmin → user pages to the matching /turfadmin/ page; anything else
    goes to the role's default path.
    """
    normalized = normalize_role(role)
    if intended_path and normalized == USER and "/turfadmin/" in intended_path:
        return intended_path.replace("/turfadmin/", "/user/", 1)
    if intended_path and normalized == TURFADMIN and "/user/" in intended_path:
        return intended_path.replace("/user/", "/turfadmin/", 1)
    return resolve_default_path(role)


def role_based_path(role: Optional[str], base_path: Optional[str]) -> Optional[str]:
    """
    Prefix `base_path` with the role's segment:

        role_based_path("turfadmin", "bookings") -> "/turfadmin/bookings"

    Unknown roles get the bare path; missing input is returned as is.
    """
    normalized = normalize_role(role)
    if normalized is None or not base_path:
        return base_path

    clean = base_path[1:] if base_path.startswith("/") else base_path
    prefix = PATH_PREFIXES.get(normalized)
    if prefix is None:
        return f"/{clean}"
    return f"/{prefix}/{clean}"
