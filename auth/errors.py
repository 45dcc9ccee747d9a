"""
Error taxonomy for the account subsystem.

Every error carries an HTTP ``status_code`` and a human-readable
``message``; ``api.middleware`` renders them as ``{"message": ...}``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationFailed(AppError):
    status_code = 400
    default_message = "Invalid request fields"

    def __init__(self, errors: List[FieldError], message: Optional[str] = None) -> None:
        super().__init__(message)
        self.errors = list(errors)

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["errors"] = [e.to_dict() for e in self.errors]
        return body


class InvalidCode(AppError):
    status_code = 400
    default_message = "Invalid or expired code"


class Unauthorized(AppError):
    status_code = 401
    default_message = "Invalid email or password"


class InvalidToken(Unauthorized):
    default_message = "Invalid token"


class ExpiredToken(Unauthorized):
    default_message = "Token expired"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class AccountNotFound(NotFound):
    default_message = "User not found"


class Conflict(AppError):
    status_code = 409
    default_message = "Email already registered"


class DuplicateEmail(Conflict):
    """Raised by the store when the email uniqueness constraint fires."""


class StoreError(AppError):
    """Persistence failure. ``retryable`` marks transient (network/timeout) causes."""

    status_code = 500

    def __init__(self, message: Optional[str] = None, *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable

    def to_body(self) -> Dict[str, Any]:
        # never expose driver detail
        return {"message": self.default_message}
