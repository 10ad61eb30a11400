# turfbook/schemas/auth.py
"""
Schemas for decoded token claims and access decisions.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class AuthClaim(BaseModel):
    """Claims decoded from a bearer token. Unknown claims are kept."""
    role: Optional[str] = None
    sub: Optional[str | int] = None
    id: Optional[str | int] = None
    exp: Optional[float] = None
    iat: Optional[float] = None

    model_config = {"extra": "allow", "frozen": True}


class AccessCode(str, Enum):
    NO_TOKEN = "NO_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"
    TOKEN_ERROR = "TOKEN_ERROR"


class AccessResult(BaseModel):
    success: bool
    code: Optional[AccessCode] = None
    error: Optional[str] = None
    user_role: Optional[str] = None
    required_role: Optional[str | list[str]] = None
    message: Optional[str] = None
    details: Optional[str] = None

    model_config = {"frozen": True}


class AccessExplanation(BaseModel):
    title: str
    message: str

    model_config = {"frozen": True}
