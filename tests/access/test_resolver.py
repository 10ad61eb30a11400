# tests/access/test_resolver.py

import pytest

from turfbook.access.resolver import (
    access_denied_message,
    explain_access_denied,
    redirect_for,
    validate_token_and_role,
)
from turfbook.schemas.auth import AccessCode


def test_missing_token():
    result = validate_token_and_role(None, "user")

    assert not result.success
    assert result.code == AccessCode.NO_TOKEN
    assert result.error == "No authentication token provided"


@pytest.mark.parametrize("token", ["garbage", "a.b.c"])
def test_token_without_role(token):
    result = validate_token_and_role(token, "user")

    assert result.code == AccessCode.INVALID_TOKEN
    assert result.error == "Invalid token or no role found"


def test_token_with_claims_but_no_role(token_factory):
    result = validate_token_and_role(token_factory({"sub": "u1"}), "user")
    assert result.code == AccessCode.INVALID_TOKEN


def test_insufficient_role(token_factory):
    result = validate_token_and_role(token_factory({"role": "user"}), "turfadmin")

    assert not result.success
    assert result.code == AccessCode.INSUFFICIENT_ROLE
    assert result.user_role == "user"
    assert result.required_role == "turfadmin"
    assert result.error == "Access denied. Required role: turfadmin, Current role: user"


def test_insufficient_role_with_role_list(token_factory):
    result = validate_token_and_role(token_factory({"role": "user"}), ("admin", "superadmin"))

    assert result.required_role == ["admin", "superadmin"]
    assert result.error == "Access denied. Required role: admin, superadmin, Current role: user"


def test_access_granted_through_hierarchy(token_factory):
    result = validate_token_and_role(token_factory({"role": "admin"}), "user")

    assert result.success
    assert result.code is None
    assert result.user_role == "admin"
    assert result.message == "Access granted"


def test_exact_matching(token_factory):
    token = token_factory({"role": "admin"})
    result = validate_token_and_role(token, "user", use_hierarchy=False)
    assert result.code == AccessCode.INSUFFICIENT_ROLE


def test_custom_role_extractor():
    result = validate_token_and_role("opaque", "turfadmin", role_extractor=lambda token: "turfadmin")
    assert result.success


def test_extractor_failure_is_reported(mocker):
    extractor = mocker.Mock(side_effect=RuntimeError("keyserver down"))

    result = validate_token_and_role("opaque", "user", role_extractor=extractor)

    assert not result.success
    assert result.code == AccessCode.TOKEN_ERROR
    assert result.error == "Token validation failed"
    assert result.details == "keyserver down"
    extractor.assert_called_once_with("opaque")


def test_redirect_for(token_factory):
    granted = validate_token_and_role(token_factory({"role": "user"}), "user")
    no_token = validate_token_and_role("", "user")
    wrong_role = validate_token_and_role(token_factory({"role": "user"}), "turfadmin")

    assert redirect_for(granted, "/user/bookings") is None
    assert redirect_for(no_token, "/user/bookings") == "/login"
    assert redirect_for(wrong_role, "/turfadmin/bookings") == "/user/bookings"
    assert redirect_for(wrong_role, "/turfadmin") == "/user/dashboard"


@pytest.mark.parametrize(
    "user_role,required,title",
    [
        ("turfadmin", "user", "Wrong Endpoint Access"),
        ("user", "turfadmin", "Insufficient Permissions"),
        ("user", "admin", "Insufficient Permissions"),
        ("turfadmin", "admin", "Access Denied"),
        (None, "user", "Access Denied"),
        ("user", ["admin", "turfadmin"], "Access Denied"),
    ],
)
def test_explain_access_denied_titles(user_role, required, title):
    assert explain_access_denied(user_role, required).title == title


def test_explanation_names_both_roles():
    explanation = explain_access_denied("user", "turfadmin")

    assert "Current role: user" in explanation.message
    assert "Required role: turfadmin" in explanation.message


def test_generic_explanation_lists_required_roles():
    explanation = explain_access_denied("user", ["admin", "superadmin"])
    assert "Required role: admin, superadmin" in explanation.message


@pytest.mark.parametrize(
    "message,expected",
    [
        (
            "This endpoint requires user role, you have turfadmin",
            "You are trying to access user endpoints with turfadmin role. "
            "Please use turfadmin-specific endpoints or contact support.",
        ),
        ("Route requires turfadmin role", "You need turf admin permissions to access this feature."),
        (
            "Route requires user role",
            "This feature is only available for regular users. Please use your user account.",
        ),
        ("Route requires admin role", "You need admin permissions to access this feature."),
        ("Something else", "Access denied. Please check your permissions or contact support."),
        (None, "Access denied. Please check your permissions or contact support."),
    ],
)
def test_access_denied_message(message, expected):
    assert access_denied_message(message) == expected
