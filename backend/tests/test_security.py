"""
Bearer token tests.

Validates:
- Issued tokens verify and carry the caller id
- Tampered, expired, foreign-key and claim-less tokens are rejected
"""

import base64
import json

import pytest

from exceptions import UnauthorizedError
from security import AuthenticatedUser, authenticate, create_access_token, decode_access_token


def _reencode_payload(token, **changes):
    header_b64, payload_b64, signature_b64 = token.split('.')
    padded = payload_b64 + '=' * (-len(payload_b64) % 4)
    payload = json.loads(base64.urlsafe_b64decode(padded))
    payload.update(changes)
    new_payload = base64.urlsafe_b64encode(json.dumps(payload).encode()).rstrip(b"=").decode()
    return f"{header_b64}.{new_payload}.{signature_b64}"


def test_round_trip():
    token = create_access_token({"userId": 42})
    assert authenticate(token) == AuthenticatedUser(user_id=42)


def test_numeric_string_user_id_accepted():
    assert authenticate(create_access_token({"userId": "42"})).user_id == 42


def test_tampered_payload_rejected():
    token = _reencode_payload(create_access_token({"userId": 42}), userId=1)
    with pytest.raises(UnauthorizedError):
        decode_access_token(token)


def test_wrong_secret_rejected():
    token = create_access_token({"userId": 42}, secret="someone-else")
    with pytest.raises(UnauthorizedError):
        decode_access_token(token)


def test_expired_token_rejected():
    token = create_access_token({"userId": 42}, expires_in_seconds=-10)
    with pytest.raises(UnauthorizedError, match="expired"):
        decode_access_token(token)


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "!!!.???.***"])
def test_malformed_token_rejected(token):
    with pytest.raises(UnauthorizedError):
        decode_access_token(token)


@pytest.mark.parametrize("claims", [{}, {"userId": None}, {"userId": "me"}, {"userId": True}])
def test_missing_or_unusable_user_id_rejected(claims):
    with pytest.raises(UnauthorizedError):
        authenticate(create_access_token(claims))


def test_token_for_unknown_user_is_still_authenticated(client, auth_headers_for, db_session):
    # Identity is the token's business; listing works for any verified caller
    response = client.get("/help-requests", headers=auth_headers_for(999))
    assert response.status_code == 200
    assert response.json() == []
