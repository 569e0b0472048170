"""Bearer-token verification backed by the Firebase Admin SDK."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Protocol

import firebase_admin
from firebase_admin import auth, credentials

logger = logging.getLogger(__name__)


class TokenVerificationError(ValueError):
    """Raised when a bearer token cannot be turned into a verified principal."""


class TokenVerifier(Protocol):
    async def verify(self, token: str) -> str:
        """Return the verified email for `token` or raise TokenVerificationError."""
        ...

    def close(self) -> None: ...


class FirebaseTokenVerifier:
    def __init__(
        self,
        service_account_info: Mapping[str, Any],
        *,
        app_name: str = "deals-server",
    ) -> None:
        certificate = credentials.Certificate(dict(service_account_info))
        self._app = firebase_admin.initialize_app(certificate, name=app_name)

    async def verify(self, token: str) -> str:
        if not token:
            raise TokenVerificationError("token missing")
        try:
            claims = await asyncio.to_thread(auth.verify_id_token, token, app=self._app)
        except (
            ValueError,
            auth.InvalidIdTokenError,
            auth.CertificateFetchError,
            auth.UserDisabledError,
        ) as exc:
            # Expired and revoked tokens subclass InvalidIdTokenError
            logger.debug(f"token rejected: {type(exc).__name__}")
            raise TokenVerificationError("token rejected by identity service") from exc
        email = claims.get("email")
        if not email:
            raise TokenVerificationError("token carries no email claim")
        return email

    def close(self) -> None:
        firebase_admin.delete_app(self._app)
