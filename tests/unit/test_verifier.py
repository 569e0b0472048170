"""Unit tests for the Firebase token verifier with the SDK mocked out."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import auth

from deals_server.auth import build_verifier
from deals_server.auth.verifier import FirebaseTokenVerifier, TokenVerificationError

from .support import SERVICE_ACCOUNT


@pytest.fixture
def firebase_app():
    app = MagicMock(name="firebase_app")
    with patch("deals_server.auth.verifier.credentials.Certificate") as certificate, patch(
        "deals_server.auth.verifier.firebase_admin.initialize_app", return_value=app
    ) as initialize_app, patch("deals_server.auth.verifier.firebase_admin.delete_app") as delete_app:
        yield {
            "app": app,
            "certificate": certificate,
            "initialize_app": initialize_app,
            "delete_app": delete_app,
        }


def test_initializes_named_app(firebase_app):
    verifier = FirebaseTokenVerifier(SERVICE_ACCOUNT)
    firebase_app["certificate"].assert_called_once_with(SERVICE_ACCOUNT)
    firebase_app["initialize_app"].assert_called_once_with(
        firebase_app["certificate"].return_value, name="deals-server"
    )
    verifier.close()
    firebase_app["delete_app"].assert_called_once_with(firebase_app["app"])


@pytest.mark.asyncio
async def test_verified_email_returned(firebase_app):
    verifier = FirebaseTokenVerifier(SERVICE_ACCOUNT)
    with patch(
        "deals_server.auth.verifier.auth.verify_id_token",
        return_value={"uid": "u1", "email": "alice@example.com"},
    ) as verify_id_token:
        assert await verifier.verify("id-token") == "alice@example.com"
    verify_id_token.assert_called_once_with("id-token", app=firebase_app["app"])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        auth.InvalidIdTokenError("malformed"),
        auth.ExpiredIdTokenError("expired", cause=None),
        ValueError("not a string"),
    ],
)
async def test_rejected_tokens(firebase_app, error):
    verifier = FirebaseTokenVerifier(SERVICE_ACCOUNT)
    with patch("deals_server.auth.verifier.auth.verify_id_token", side_effect=error):
        with pytest.raises(TokenVerificationError):
            await verifier.verify("id-token")


@pytest.mark.asyncio
async def test_token_without_email(firebase_app):
    verifier = FirebaseTokenVerifier(SERVICE_ACCOUNT)
    with patch("deals_server.auth.verifier.auth.verify_id_token", return_value={"uid": "u1"}):
        with pytest.raises(TokenVerificationError):
            await verifier.verify("id-token")


@pytest.mark.asyncio
async def test_empty_token_skips_identity_service(firebase_app):
    verifier = FirebaseTokenVerifier(SERVICE_ACCOUNT)
    with patch("deals_server.auth.verifier.auth.verify_id_token") as verify_id_token:
        with pytest.raises(TokenVerificationError):
            await verifier.verify("")
    verify_id_token.assert_not_called()


def test_build_verifier_requires_credentials():
    with pytest.raises(ValueError, match="FIREBASE_SERVICE_KEY"):
        build_verifier(None)
