"""
Bearer token verification.

Tokens are HS256 JSON Web Tokens (``header.payload.signature``, each part
base64url encoded) signed with ``HELP_REQUESTS_JWT_SECRET``. They are issued
by the identity service; ``create_access_token`` exists for operators and
tests. Every token must carry a ``userId`` claim and an ``exp`` timestamp.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config.app_config import JWT_SECRET, TOKEN_TTL_MINUTES
from constants import HTTPStatus
from exceptions import UnauthorizedError
from utils.logging_utils import set_logging_context

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Verified caller identity."""

    user_id: int


def _b64_url_encode(data: bytes) -> str:
    """Base64url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode a base64url string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    claims: Dict[str, Any],
    expires_in_seconds: Optional[int] = None,
    secret: str = JWT_SECRET
) -> str:
    """
    Create a signed token carrying ``claims`` plus an ``exp`` timestamp.

    Args:
        claims: Claims to embed, e.g. ``{"userId": 42}``
        expires_in_seconds: Lifetime, defaults to ``TOKEN_TTL_MINUTES``
        secret: Signing secret

    Returns:
        Encoded token
    """
    payload = dict(claims)
    lifetime = expires_in_seconds if expires_in_seconds is not None else TOKEN_TTL_MINUTES * 60
    payload["exp"] = int(time.time()) + lifetime
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(payload, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(_sign(signing_input, secret))}"


def decode_access_token(token: str, secret: str = JWT_SECRET) -> Dict[str, Any]:
    """
    Verify a token and return its payload.

    Args:
        token: Encoded token
        secret: Signing secret

    Returns:
        Decoded claims

    Raises:
        UnauthorizedError: Malformed token, bad signature or expired
    """
    parts = token.split('.')
    if len(parts) != 3:
        raise UnauthorizedError("Malformed token")
    header_b64, payload_b64, signature_b64 = parts

    try:
        header = json.loads(_b64_url_decode(header_b64))
        actual_sig = _b64_url_decode(signature_b64)
        payload = json.loads(_b64_url_decode(payload_b64))
    except (ValueError, UnicodeDecodeError):
        raise UnauthorizedError("Malformed token")

    if not isinstance(header, dict) or header.get("alg") != "HS256":
        raise UnauthorizedError("Unsupported token algorithm")

    expected_sig = _sign(f"{header_b64}.{payload_b64}".encode("utf-8"), secret)
    # Constant-time comparison
    if not hmac.compare_digest(expected_sig, actual_sig):
        raise UnauthorizedError("Invalid token signature")

    if not isinstance(payload, dict):
        raise UnauthorizedError("Malformed token")
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or exp < time.time():
        raise UnauthorizedError("Token expired")

    return payload


def authenticate(token: str) -> AuthenticatedUser:
    """
    Resolve a token into the caller identity.

    Raises:
        UnauthorizedError: Token invalid or without a usable ``userId`` claim
    """
    payload = decode_access_token(token)
    user_id = payload.get("userId")
    if isinstance(user_id, bool):
        raise UnauthorizedError("Token carries no userId claim")
    try:
        return AuthenticatedUser(user_id=int(user_id))
    except (TypeError, ValueError):
        raise UnauthorizedError("Token carries no userId claim")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme)
) -> AuthenticatedUser:
    """
    FastAPI dependency returning the verified caller.

    Raises:
        HTTPException: 401 when the bearer token is missing or invalid
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user = authenticate(credentials.credentials)
    except UnauthorizedError as e:
        logger.info(f"Rejected bearer token: {e.message}")
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    set_logging_context(user_id=user.user_id)
    return user
