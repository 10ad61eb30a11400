# turfbook/middleware/role_guard.py
# path → required roles, first matching rule wins
# unmatched paths are public
# policy.reload() re-reads the policy file

import fnmatch
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import quote

from fastapi import Request
from starlette.responses import JSONResponse, RedirectResponse

from ..access.resolver import explain_access_denied, redirect_for, validate_token_and_role
from ..access.roles import ADMIN, ROLE_HIERARCHY, SUPERADMIN, TURFADMIN, USER
from ..access.tokens import bearer_token, decode_verified_claims, extract_role
from ..config import Settings, get_settings
from ..exceptions import ConfigurationError, TokenVerificationError
from ..schemas.auth import AccessCode

logger = logging.getLogger(__name__)

ANY_ROLE = tuple(ROLE_HIERARCHY)


@dataclass(frozen=True)
class RouteRule:
    paths: tuple[str, ...]
    roles: tuple[str, ...] = ANY_ROLE
    use_hierarchy: bool = False

    def matches(self, path: str) -> bool:
        return any(fnmatch.fnmatch(path, p) for p in self.paths)


# Dashboards are matched exactly: a turfadmin is sent to /turfadmin/...,
# not shown the /user/... pages.
DEFAULT_RULES = (
    RouteRule(paths=("/superadmin", "/superadmin/*"), roles=(ADMIN, SUPERADMIN)),
    RouteRule(paths=("/admin", "/admin/*"), roles=(ADMIN, SUPERADMIN)),
    RouteRule(paths=("/turfadmin", "/turfadmin/*"), roles=(TURFADMIN,)),
    RouteRule(paths=("/user", "/user/*"), roles=(USER,)),
    RouteRule(paths=("/my-bookings", "/payment")),
)


class RouteRolePolicy:
    def __init__(self, path: Optional[Path] = None):
        self.path = path
        self._load_policy()

    def _load_policy(self):
        if self.path is None:
            self.rules = list(DEFAULT_RULES)
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                policy = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot load route policy {self.path}: {e}") from e

        if not isinstance(policy, dict) or not isinstance(policy.get("route_rules", []), list):
            raise ConfigurationError(f"{self.path}: expected {{\"route_rules\": [...]}}")

        self.rules = [self._parse_rule(rule) for rule in policy.get("route_rules", [])]

    def _parse_rule(self, rule) -> RouteRule:
        if not isinstance(rule, dict):
            raise ConfigurationError(f"{self.path}: rule must be an object, got {rule!r}")

        paths = _as_names(rule.get("path"))
        if not paths:
            raise ConfigurationError(f"{self.path}: rule without path: {rule!r}")

        # No roles listed: any signed-in role
        roles = _as_names(rule.get("roles")) if rule.get("roles") else ANY_ROLE
        if roles is None:
            raise ConfigurationError(f"{self.path}: roles must be strings: {rule!r}")

        return RouteRule(
            paths=paths,
            roles=tuple(r.lower() for r in roles),
            use_hierarchy=bool(rule.get("use_hierarchy", False)),
        )

    def reload(self):
        self._load_policy()

    def match(self, path: str) -> Optional[RouteRule]:
        for rule in self.rules:
            if rule.matches(path):
                return rule
        return None


def _as_names(value) -> Optional[tuple[str, ...]]:
    """A string or a list of non-empty strings as a tuple; None otherwise."""
    if isinstance(value, str):
        return (value,) if value else None
    if isinstance(value, list) and value and all(isinstance(v, str) and v for v in value):
        return tuple(value)
    return None


policy = RouteRolePolicy(get_settings().route_policy_path)


def _role_extractor(settings: Settings) -> Callable[[str], Optional[str]]:
    if not settings.verifies_tokens:
        return extract_role

    def verified_role(token: str) -> Optional[str]:
        try:
            return decode_verified_claims(token, settings.jwt_secret, settings.jwt_algorithms).role
        except TokenVerificationError as e:
            logger.info("Token rejected: %s", e)
            return None

    return verified_role


def _request_token(request: Request, settings: Settings) -> Optional[str]:
    return (
        bearer_token(request.headers.get("Authorization"))
        or request.cookies.get(settings.token_cookie_name)
    )


def _wants_json(request: Request) -> bool:
    accept = request.headers.get("Accept", "")
    return "application/json" in accept and "text/html" not in accept


async def role_guard_middleware(request: Request, call_next):
    path = request.url.path
    rule = policy.match(path)
    if rule is None:
        return await call_next(request)

    settings = get_settings()
    result = validate_token_and_role(
        _request_token(request, settings),
        rule.roles[0] if len(rule.roles) == 1 else list(rule.roles),
        role_extractor=_role_extractor(settings),
        use_hierarchy=rule.use_hierarchy,
    )

    if result.success:
        request.state.user_role = result.user_role
        return await call_next(request)

    if _wants_json(request):
        content = {"detail": result.error, "code": result.code.value}
        status = 401
        if result.code == AccessCode.INSUFFICIENT_ROLE:
            status = 403
            explanation = explain_access_denied(result.user_role, result.required_role)
            content.update(title=explanation.title, message=explanation.message)
        return JSONResponse(status_code=status, content=content)

    target = redirect_for(result, path)
    if result.code != AccessCode.INSUFFICIENT_ROLE:
        original = path + (f"?{request.url.query}" if request.url.query else "")
        target = f"{target}?redirect={quote(original, safe='')}"

    logger.info("Redirecting %s (%s) to %s", path, result.code.value, target)
    return RedirectResponse(url=target, status_code=303)
