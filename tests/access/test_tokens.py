# tests/access/test_tokens.py

import base64
import time

import pytest
from jose import jwt

from turfbook.access.tokens import (
    bearer_token,
    decode_claims,
    decode_payload,
    decode_verified_claims,
    extract_role,
    is_token_expired,
    role_from_claims,
)
from turfbook.exceptions import TokenVerificationError

SECRET = "test-secret"


def test_extract_role(token_factory):
    assert extract_role(token_factory({"role": "user", "sub": "u1"})) == "user"


def test_extract_role_from_legacy_user_type(token_factory):
    assert extract_role(token_factory({"userType": "turfadmin"})) == "turfadmin"


def test_role_claim_wins_over_user_type(token_factory):
    assert extract_role(token_factory({"role": "admin", "userType": "user"})) == "admin"


@pytest.mark.parametrize(
    "claims,expected",
    [
        ({"role": ["user", "turfadmin"]}, "turfadmin"),
        ({"role": ["user", "TurfAdmin"]}, "TurfAdmin"),
        ({"role": ["admin", "user"]}, "admin"),
        ({"role": [], "userType": "user"}, "user"),
        ({"role": ""}, None),
        ({"role": 7}, None),
        ({}, None),
    ],
)
def test_role_from_claims(claims, expected):
    assert role_from_claims(claims) == expected


@pytest.mark.parametrize(
    "token",
    [
        None,
        "",
        42,
        "not-a-token",
        "a.b",
        "a..c",
        "a.b.c.d",
        "header.!!!.signature",
        "header.bm90IGpzb24.signature",  # "not json"
        "header.WzEsMl0.signature",  # [1,2]
    ],
)
def test_undecodable_tokens(token):
    assert decode_payload(token) is None
    assert extract_role(token) is None
    assert decode_claims(token) is None
    assert is_token_expired(token)


def test_payload_without_padding(token_factory):
    token = token_factory({"role": "user", "name": "Ravi"})
    assert decode_payload(token) == {"role": "user", "name": "Ravi"}


def test_decode_claims_keeps_extra_fields(token_factory):
    claims = decode_claims(token_factory({"userType": "user", "sub": "u1", "email": "a@b.c"}))

    assert claims.role == "user"
    assert claims.sub == "u1"
    assert claims.email == "a@b.c"


def test_expiry(token_factory):
    now = 1_800_000_000

    assert not is_token_expired(token_factory({"exp": now + 60}), now=now)
    assert is_token_expired(token_factory({"exp": now - 60}), now=now)
    assert is_token_expired(token_factory({"exp": "tomorrow"}), now=now)
    assert is_token_expired(token_factory({"role": "user"}), now=now)


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer   abc.def.ghi ", "abc.def.ghi"),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer", None),
        ("Bearer   ", None),
        ("", None),
        (None, None),
    ],
)
def test_bearer_token(header, expected):
    assert bearer_token(header) == expected


def test_verified_claims():
    token = jwt.encode({"role": "turfadmin", "sub": "t1", "exp": int(time.time()) + 300}, SECRET)

    claims = decode_verified_claims(token, SECRET)

    assert claims.role == "turfadmin"
    assert claims.sub == "t1"


def test_verified_claims_resolve_legacy_role_list():
    token = jwt.encode({"userType": ["user", "turfadmin"]}, SECRET)
    assert decode_verified_claims(token, SECRET).role == "turfadmin"


def test_verified_claims_reject_bad_signature():
    token = jwt.encode({"role": "admin"}, "some-other-secret")
    with pytest.raises(TokenVerificationError):
        decode_verified_claims(token, SECRET)


def test_verified_claims_reject_expired_token():
    token = jwt.encode({"role": "user", "exp": int(time.time()) - 300}, SECRET)
    with pytest.raises(TokenVerificationError):
        decode_verified_claims(token, SECRET)


def test_verified_claims_reject_unsigned_token(token_factory):
    with pytest.raises(TokenVerificationError):
        decode_verified_claims(token_factory({"role": "admin"}), SECRET)


def test_verified_claims_need_a_secret():
    token = jwt.encode({"role": "user"}, SECRET)
    with pytest.raises(TokenVerificationError):
        decode_verified_claims(token, "")


def test_deeply_nested_payload_is_rejected():
    nested = base64.urlsafe_b64encode(b"[" * 100000 + b"]" * 100000).rstrip(b"=").decode()
    token = f"header.{nested}.signature"

    assert decode_payload(token) is None
    assert extract_role(token) is None
    assert decode_claims(token) is None
    assert is_token_expired(token)
