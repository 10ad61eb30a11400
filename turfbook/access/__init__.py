# turfbook/access/__init__.py
"""
Role-based access resolution.

roles: static hierarchy, access checks, navigation paths
tokens: claim decoding (unverified for routing, verified for authorization)
resolver: structured validation results and denial explanations
"""

from .roles import (
    ROLE_HIERARCHY,
    has_access,
    remap_path_for_role,
    resolve_default_path,
    role_based_path,
)
from .tokens import (
    bearer_token,
    decode_claims,
    decode_verified_claims,
    extract_role,
    is_token_expired,
)
from .resolver import (
    access_denied_message,
    explain_access_denied,
    redirect_for,
    validate_token_and_role,
)

__all__ = [
    "ROLE_HIERARCHY",
    "has_access",
    "remap_path_for_role",
    "resolve_default_path",
    "role_based_path",
    "bearer_token",
    "decode_claims",
    "decode_verified_claims",
    "extract_role",
    "is_token_expired",
    "access_denied_message",
    "explain_access_denied",
    "redirect_for",
    "validate_token_and_role",
]
