# turfbook/access/tokens.py
"""
Bearer token helpers.

Two paths:
- decode_payload() / extract_role(): unverified claim decoding, for UX
  routing only (which dashboard to show, where to redirect)
- decode_verified_claims(): signature + exp check via python-jose, for
  anything that actually authorizes

Unverified decoding trusts whatever the client sent. Never use it to
grant access to data.
"""

import base64
import binascii
import json
import logging
import time
from typing import Any, Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from ..exceptions import TokenVerificationError
from ..schemas.auth import AuthClaim

logger = logging.getLogger(__name__)

ROLE_CLAIMS = ("role", "userType")


# ============================================================
# UNVERIFIED DECODING
# ============================================================

def decode_payload(token: Any) -> Optional[dict]:
    """
    JSON payload (middle segment) of a compact three-part token.

    Returns None for anything that is not such a token; never raises.
    """
    if not isinstance(token, str) or not token:
        return None

    parts = token.split(".")
    if len(parts) != 3 or not parts[1]:
        return None

    segment = parts[1]
    try:
        raw = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError, RecursionError) as e:
        logger.debug("Token payload decode failed: %s", e)
        return None

    if not isinstance(payload, dict):
        return None
    return payload


def extract_role(token: Any) -> Optional[str]:
    """`role` (or legacy `userType`) claim of the token, None if absent or undecodable."""
    payload = decode_payload(token)
    if payload is None:
        return None
    return role_from_claims(payload)


def role_from_claims(claims: dict) -> Optional[str]:
    for name in ROLE_CLAIMS:
        value = claims.get(name)
        # Legacy admin accounts carry a list of roles
        if isinstance(value, list):
            names = [v for v in value if isinstance(v, str) and v]
            if not names:
                continue
            lowered = [v.lower() for v in names]
            value = names[lowered.index("turfadmin")] if "turfadmin" in lowered else names[0]
        if isinstance(value, str) and value:
            return value
    return None


def decode_claims(token: Any) -> Optional[AuthClaim]:
    """Unverified claims with the role resolved from role/userType."""
    payload = decode_payload(token)
    if payload is None:
        return None
    try:
        return AuthClaim(**{**payload, "role": role_from_claims(payload)})
    except ValidationError as e:
        logger.debug("Token claims rejected: %s", e)
        return None


def is_token_expired(token: Any, now: Optional[float] = None) -> bool:
    """
    True if `exp` is in the past.

    Undecodable tokens and tokens without a numeric exp count as expired.
    """
    payload = decode_payload(token)
    if payload is None:
        return True
    exp = payload.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return True
    now = time.time() if now is None else now
    return exp < now


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an "Authorization: Bearer <token>" header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


# ============================================================
# VERIFIED DECODING
# ============================================================

def decode_verified_claims(
    token: str,
    secret: str,
    algorithms: list[str] | None = None,
) -> AuthClaim:
    """
    Verify signature and expiry, then return the claims.

    Raises:
        TokenVerificationError: bad signature, expired, malformed
    """
    if not secret:
        raise TokenVerificationError("Token secret is not configured")

    try:
        payload = jwt.decode(token, secret, algorithms=algorithms or ["HS256"])
    except JWTError as e:
        raise TokenVerificationError(str(e)) from None

    try:
        return AuthClaim(**{**payload, "role": role_from_claims(payload)})
    except ValidationError as e:
        raise TokenVerificationError(f"Invalid token claims: {e}") from None
