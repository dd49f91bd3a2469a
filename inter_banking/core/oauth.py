"""OAuth2 client-credentials exchange against the Inter token endpoint."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ValidationError

from .data_models import Token
from .exceptions import AuthError
from .transport import SecureTransport

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/v2/token"
GRANT_TYPE = "client_credentials"


class _ApiToken(BaseModel):
    access_token: str
    token_type: str
    expires_in: int
    scope: str = ""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenAuthenticator:
    """Obtains bearer tokens; every call performs a fresh exchange."""

    def __init__(self, transport: SecureTransport):
        self._transport = transport

    async def authorize(
        self,
        client_id: str,
        client_secret: str,
        *scopes: str,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> Token:
        """
        Exchange client credentials for a token granting ``scopes``.

        Raises AuthError when the endpoint answers anything but 200 (the
        message is the response body verbatim) or when the body is not a
        token document. Transport failures propagate as TransportError.
        """
        form = {
            "client_id": client_id,
            "client_secret": client_secret,
            "grant_type": GRANT_TYPE,
            "scope": " ".join(scopes),
        }

        logger.info("Requesting access token for client_id %s (scopes: %s)", client_id, form["scope"] or "-")
        response = await self._transport.request(
            "POST",
            TOKEN_PATH,
            data=form,
            cancel=cancel,
            timeout=timeout,
        )
        if response.status_code != 200:
            raise AuthError(response.text, status_code=response.status_code)

        try:
            payload = _ApiToken.model_validate_json(response.content)
        except ValidationError as exc:
            raise AuthError(f"could not decode token response: {exc}", status_code=response.status_code) from exc

        try:
            expires_at = (_utcnow() + timedelta(seconds=payload.expires_in)).replace(microsecond=0)
        except OverflowError as exc:
            raise AuthError(f"token expiry out of range: {payload.expires_in}", status_code=response.status_code) from exc
        token = Token(
            data=payload.access_token,
            type=payload.token_type,
            expires_at=expires_at,
            scopes=tuple(payload.scope.split(" ")) if payload.scope else (),
        )
        logger.info("Obtained %s token expiring at %s", token.type, expires_at.isoformat())
        return token
