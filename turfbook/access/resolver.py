# turfbook/access/resolver.py
"""
Token + role validation with structured results.

Nothing here raises: every failure comes back as an AccessResult
carrying a machine-readable code.
"""

import logging
from typing import Any, Callable, Iterable, Optional

from ..schemas.auth import AccessCode, AccessExplanation, AccessResult
from .roles import has_access, normalize_role, remap_path_for_role, resolve_default_path
from .tokens import extract_role

logger = logging.getLogger(__name__)


def validate_token_and_role(
    token: Optional[str],
    required_role: str | Iterable[str],
    role_extractor: Callable[[str], Optional[str]] = extract_role,
    use_hierarchy: bool = True,
) -> AccessResult:
    """
    Check that `token` carries a role satisfying `required_role`.

    `role_extractor` defaults to unverified decoding; pass a verifying
    extractor when the result gates real data.
    """
    if isinstance(required_role, (list, tuple, set, frozenset)):
        required = list(required_role)
    else:
        required = required_role

    if not token:
        return AccessResult(
            success=False,
            code=AccessCode.NO_TOKEN,
            error="No authentication token provided",
        )

    try:
        user_role = role_extractor(token)

        if not user_role:
            return AccessResult(
                success=False,
                code=AccessCode.INVALID_TOKEN,
                error="Invalid token or no role found",
            )

        if not has_access(user_role, required, use_hierarchy):
            logger.info("Access denied: role=%s required=%s", user_role, required)
            return AccessResult(
                success=False,
                code=AccessCode.INSUFFICIENT_ROLE,
                error=f"Access denied. Required role: {_fmt_roles(required)}, Current role: {user_role}",
                user_role=user_role,
                required_role=required,
            )

        return AccessResult(success=True, user_role=user_role, message="Access granted")

    except Exception as e:
        logger.exception("Token validation failed")
        return AccessResult(
            success=False,
            code=AccessCode.TOKEN_ERROR,
            error="Token validation failed",
            details=str(e),
        )


def redirect_for(result: AccessResult, intended_path: Optional[str] = None) -> Optional[str]:
    """
    Where to send a refused navigation; None when access was granted.

    No / invalid token → login page; wrong role → the role's equivalent
    page or its default dashboard.
    """
    if result.success:
        return None
    if result.code == AccessCode.INSUFFICIENT_ROLE:
        return remap_path_for_role(intended_path, result.user_role)
    return resolve_default_path(None)


# ============================================================
# EXPLANATIONS
# ============================================================

_EXPLANATIONS: dict[str, tuple[str, str]] = {
    "turfadmin_needs_user": (
        "Wrong Endpoint Access",
        'You have "turfadmin" role but are trying to access "user" endpoints.\n\n'
        "Solution:\n"
        "- Use turfadmin-specific endpoints instead\n"
        "- Example: /turfadmin/dashboard instead of /user/dashboard\n"
        "- Contact support if you need access to user features\n\n"
        "Current role: {user_role}\n"
        "Required role: {required_role}\n\n"
        "This is normal - each role has its own endpoints.",
    ),
    "user_needs_turfadmin": (
        "Insufficient Permissions",
        'You have "user" role but are trying to access "turfadmin" endpoints.\n\n'
        "Current role: {user_role}\n"
        "Required role: {required_role}\n\n"
        "Please contact an administrator to upgrade your account to turfadmin.",
    ),
    "user_needs_admin": (
        "Insufficient Permissions",
        'You have "user" role, but this feature requires admin access.\n\n'
        "Current role: {user_role}\n"
        "Required role: {required_role}\n\n"
        "Please contact an administrator for access.",
    ),
    "generic": (
        "Access Denied",
        "Role mismatch detected.\n\n"
        "Your role: {user_role}\n"
        "Required role: {required_role}\n\n"
        "Please contact support for assistance.",
    ),
}


def explain_access_denied(user_role: Optional[str], required_role: Any) -> AccessExplanation:
    """User-facing explanation for a (current role, required role) pair."""
    required = required_role if isinstance(required_role, str) else None
    key = f"{normalize_role(user_role)}_needs_{normalize_role(required)}"
    title, template = _EXPLANATIONS.get(key, _EXPLANATIONS["generic"])
    return AccessExplanation(
        title=title,
        message=template.format(
            user_role=user_role,
            required_role=_fmt_roles(required_role),
        ),
    )


def access_denied_message(error_message: Optional[str]) -> str:
    """Map a server-side denial message to a sentence for the user."""
    message = error_message or "Access denied"

    if "requires user role" in message and "turfadmin" in message:
        return (
            "You are trying to access user endpoints with turfadmin role. "
            "Please use turfadmin-specific endpoints or contact support."
        )
    if "requires turfadmin role" in message:
        return "You need turf admin permissions to access this feature."
    if "requires user role" in message:
        return "This feature is only available for regular users. Please use your user account."
    if "requires admin role" in message:
        return "You need admin permissions to access this feature."
    return "Access denied. Please check your permissions or contact support."


def _fmt_roles(required: Any) -> str:
    if isinstance(required, (list, tuple, set, frozenset)):
        return ", ".join(str(r) for r in required)
    return str(required)
