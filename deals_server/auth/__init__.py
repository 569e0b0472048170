"""Identity verification for protected routes."""

from __future__ import annotations

from typing import Any, Mapping

from .credentials import CredentialError, decode_service_key
from .gate import assert_owner, require_verified_email
from .verifier import FirebaseTokenVerifier, TokenVerificationError, TokenVerifier


def build_verifier(service_account_info: Mapping[str, Any] | None) -> TokenVerifier:
    if not service_account_info:
        raise ValueError("FIREBASE_SERVICE_KEY is required to verify tokens")
    return FirebaseTokenVerifier(service_account_info)


__all__ = [
    "CredentialError",
    "FirebaseTokenVerifier",
    "TokenVerificationError",
    "TokenVerifier",
    "assert_owner",
    "build_verifier",
    "decode_service_key",
    "require_verified_email",
]
