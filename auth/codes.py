"""
One-time codes for account verification and password reset.

Codes are 32 random bytes encoded URL-safe (43 characters), so they can be
placed directly in a link path.
"""

from __future__ import annotations

import secrets
from typing import Optional

CODE_BYTES = 32


def generate_code() -> str:
    """Return a fresh, unguessable single-use code."""
    return secrets.token_urlsafe(CODE_BYTES)


def generate_distinct_code(*taken: Optional[str]) -> str:
    """Draw a code that differs from every value in *taken*."""
    code = generate_code()
    while code in taken:
        code = generate_code()
    return code
