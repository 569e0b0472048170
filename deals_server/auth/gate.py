"""Per-route bearer-token gate and ownership check."""

from __future__ import annotations

from fastapi import Header, HTTPException, Request, status

from .verifier import TokenVerificationError, TokenVerifier

UNAUTHORIZED_MESSAGE = "Unauthorize Access"
FORBIDDEN_MESSAGE = "Forbidden Access"


def bearer_token(authorization: str | None) -> str | None:
    """Second space-delimited segment of the Authorization header, if any."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


def _get_verifier(request: Request) -> TokenVerifier:
    return request.app.state.verifier


async def require_verified_email(
    request: Request,
    authorization: str | None = Header(default=None),
) -> str:
    token = bearer_token(authorization)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_MESSAGE)
    try:
        email = await _get_verifier(request).verify(token)
    except TokenVerificationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_MESSAGE
        ) from exc
    request.state.verified_email = email
    return email


def assert_owner(verified_email: str, email: str) -> None:
    if verified_email != email:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_MESSAGE)
