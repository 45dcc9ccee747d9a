"""
Dispatch of verification and reset codes.

Delivery (email, SMS, ...) lives outside this service.  ``CodeDispatcher``
is the seam; ``LoggingCodeDispatcher`` is the default and only records
that a code was issued.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from config.settings import config
from database.models import Account

logger = logging.getLogger(__name__)


class CodeDispatcher(ABC):
    """Abstract base for anything that delivers codes to account holders."""

    @abstractmethod
    async def send_verification(self, account: Account, code: str) -> None:
        """Deliver the signup verification code."""
        ...

    @abstractmethod
    async def send_reset(self, account: Account, code: str) -> None:
        """Deliver the password reset code."""
        ...


class LoggingCodeDispatcher(CodeDispatcher):
    def __init__(self, base_url: str | None = None) -> None:
        self.base_url = (base_url or config.public_base_url).rstrip("/")

    async def send_verification(self, account: Account, code: str) -> None:
        logger.info("Verification code issued for account %s", account.id)
        logger.debug("Verify link: %s/auth/verify/%s", self.base_url, code)

    async def send_reset(self, account: Account, code: str) -> None:
        logger.info("Password reset code issued for account %s", account.id)
