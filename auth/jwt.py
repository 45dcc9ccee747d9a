"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).

Each token carries a ``scope``: ``"access"`` for normal sessions and
``"reset"`` for the password-reset flow.  A token is only accepted for the
scope it was minted with.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import b64decode, urlsafe_b64encode
from typing import Optional

from auth.errors import ExpiredToken, InvalidToken
from config.settings import config

ACCESS_SCOPE = "access"
RESET_SCOPE = "reset"


def _sign(raw: bytes) -> str:
    return hmac.new(config.jwt_secret.encode(), raw, hashlib.sha256).hexdigest()


def _default_expiry(scope: str) -> int:
    if scope == RESET_SCOPE:
        return config.reset_token_expiry_seconds
    return config.jwt_expiry_seconds


def create_token(
    account_id: str,
    scope: str = ACCESS_SCOPE,
    expires_in: Optional[int] = None,
) -> str:
    """Create a signed token containing ``account_id``, scope and expiry."""
    now = int(time.time())
    if expires_in is None:
        expires_in = _default_expiry(scope)
    payload = {
        "sub": account_id,
        "scope": scope,
        "iat": now,
        "exp": now + expires_in,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return urlsafe_b64encode(raw).decode() + "." + _sign(raw)


def verify_token(token: str, scope: str = ACCESS_SCOPE) -> str:
    """
    Verify token and return the account id it was issued for.

    Raises ``InvalidToken`` on malformed, tampered or wrong-scope tokens
    and ``ExpiredToken`` once ``exp`` has passed.
    """
    parts = token.split(".", 1)
    if len(parts) != 2 or not token.isascii():
        raise InvalidToken("Invalid token: bad format")
    try:
        raw = b64decode(parts[0], altchars=b"-_", validate=True)
    except ValueError as exc:
        raise InvalidToken("Invalid token: bad encoding") from exc
    # only the canonical encoding of the payload is accepted
    if urlsafe_b64encode(raw).decode() != parts[0]:
        raise InvalidToken("Invalid token: bad encoding")

    if not hmac.compare_digest(parts[1], _sign(raw)):
        raise InvalidToken("Invalid token: bad signature")

    try:
        payload = json.loads(raw)
        account_id = payload["sub"]
        token_scope = payload["scope"]
        expires_at = int(payload["exp"])
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidToken("Invalid token: bad payload") from exc

    if token_scope != scope:
        raise InvalidToken("Invalid token: wrong scope")
    if expires_at < time.time():
        raise ExpiredToken()
    return str(account_id)
