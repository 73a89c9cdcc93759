"""Login gate for the dashboard."""
from __future__ import annotations

import hmac
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuthUser:
    username: str
    is_authenticated: bool = True


class CredentialVerifier(ABC):
    """Base class for checking a username and password."""

    @abstractmethod
    def verify(self, username: str, password: str) -> bool:
        """Return ``True`` when the credentials are accepted."""


@dataclass(frozen=True, slots=True)
class StaticCredentialVerifier(CredentialVerifier):
    """Accepts a single configured username and password pair."""

    username: str
    password: str

    def verify(self, username: str, password: str) -> bool:
        username_ok = hmac.compare_digest(username.encode(), self.username.encode())
        password_ok = hmac.compare_digest(password.encode(), self.password.encode())
        return username_ok and password_ok


@dataclass(slots=True)
class AuthService:
    verifier: CredentialVerifier

    def login(self, username: str | None, password: str | None) -> AuthUser | None:
        """Return the signed-in user, or ``None`` when the credentials are rejected."""

        username = (username or "").strip()
        if not username or not self.verifier.verify(username, password or ""):
            logger.info("Rejected login attempt for %r", username)
            return None
        return AuthUser(username=username)
