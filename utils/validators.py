"""
Field validators used before any account mutation.

Each ``validate_*`` function returns a list of ``FieldError`` (empty when
the input is acceptable) so checks can be combined; ``ensure_valid`` turns
a non-empty list into a ``ValidationFailed``.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

from auth.errors import FieldError, ValidationFailed
from config.settings import config

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72
MAX_NAME_LENGTH = 128

_PASSWORD_CLASSES = (
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"[0-9]"), "a digit"),
    (re.compile(r"[^A-Za-z0-9]"), "a symbol"),
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def check_required(field: str, value: Optional[str]) -> List[FieldError]:
    if _is_blank(value):
        return [FieldError(field, f"{field} is required")]
    return []


def check_name(value: Optional[str], field: str = "name") -> List[FieldError]:
    errors = check_required(field, value)
    if not errors and len(value.strip()) > MAX_NAME_LENGTH:
        errors.append(FieldError(field, f"{field} must be at most {MAX_NAME_LENGTH} characters"))
    return errors


def check_email(value: Optional[str], field: str = "email") -> List[FieldError]:
    errors = check_required(field, value)
    if errors:
        return errors
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError as exc:
        return [FieldError(field, str(exc))]
    return []


def check_password_strength(value: Optional[str], field: str = "password") -> List[FieldError]:
    """Minimum length plus one character from each class."""
    errors = check_required(field, value)
    if errors:
        return errors

    if len(value) < config.password_min_length:
        errors.append(
            FieldError(field, f"{field} must be at least {config.password_min_length} characters")
        )
    if len(value.encode()) > MAX_PASSWORD_BYTES:
        errors.append(FieldError(field, f"{field} must be at most {MAX_PASSWORD_BYTES} bytes"))
    missing = [label for pattern, label in _PASSWORD_CLASSES if not pattern.search(value)]
    if missing:
        errors.append(FieldError(field, f"{field} must contain " + ", ".join(missing)))
    return errors


def check_url(value: Optional[str], field: str) -> List[FieldError]:
    errors = check_required(field, value)
    if errors:
        return errors
    parsed = urlparse(value.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return [FieldError(field, f"{field} must be an http(s) URL")]
    return []


def collect(checks: Iterable[List[FieldError]]) -> List[FieldError]:
    errors: List[FieldError] = []
    for result in checks:
        errors.extend(result)
    return errors


def ensure_valid(errors: List[FieldError]) -> None:
    if errors:
        logger.debug("Validation failed: %s", [e.field for e in errors])
        raise ValidationFailed(errors)


# ── Operation-level validators ─────────────────────────────────────────


def validate_signup(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> List[FieldError]:
    return collect([
        check_name(name),
        check_email(email),
        check_password_strength(password),
    ])


def validate_login(email: Optional[str], password: Optional[str]) -> List[FieldError]:
    return collect([
        check_required("email", email),
        check_required("password", password),
    ])


def validate_profile_update(
    name: Optional[str],
    avatar: Optional[str],
) -> List[FieldError]:
    if name is None and avatar is None:
        return [FieldError("body", "Provide at least one of: name, avatar")]
    errors: List[FieldError] = []
    if name is not None:
        errors.extend(check_name(name))
    # a blank avatar clears it
    if avatar is not None and avatar.strip():
        errors.extend(check_url(avatar, "avatar"))
    return errors


def validate_new_password(password: Optional[str]) -> List[FieldError]:
    return check_password_strength(password)
