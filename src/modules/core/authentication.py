"""Bearer JWT authentication for the protected catalog routes.

Uses PyJWT.  Two key sources are supported:

* a shared signing key (HS256 by default), read from ``CATALOG_AUTH``;
* an identity provider's JWKS endpoint (``JWKS_URL``), fetched through
  ``PyJWKClient`` and cached in-memory (default 300 s).

Security decisions
------------------
* **Fail Closed**: a missing or malformed header raises
  ``Unauthenticated``; any decode / validation error raises
  ``InvalidCredential``.
* ``algorithms`` is hard-coded to the configured value.  Never derived
  from the incoming token.
* Tokens must carry ``exp``; audience and issuer are validated whenever
  they are configured.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Optional

import jwt as pyjwt
import structlog
from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from jwt import PyJWKClient
from jwt.exceptions import PyJWTError
from rest_framework.authentication import BaseAuthentication

from modules.core.exceptions import InvalidCredential, Unauthenticated

logger = structlog.get_logger(__name__)

KEYWORD = "Bearer"


class AuthenticatedIdentity:
    """Request-scoped identity decoded from a verified bearer token.

    There is no local ``User`` row: the token is the source of truth.
    Views read ``request.user.email`` / ``.subject`` / ``.claims``.
    """

    def __init__(self, claims: Dict[str, Any]):
        self.claims = claims
        self.subject: str = str(claims.get("sub", ""))
        self.email: str = str(claims.get("email") or self.subject)

    # DRF checks
    is_authenticated = True
    is_active = True

    def __str__(self) -> str:
        return self.email


def extract_bearer_token(header: Optional[str]) -> str:
    """Return the token from ``Bearer <token>``.

    Raises:
        Unauthenticated: header absent or not of the ``Bearer <token>`` shape.
    """
    if not header:
        raise Unauthenticated()
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != KEYWORD.lower():
        raise Unauthenticated("Invalid Authorization header format.")
    return parts[1]


class CredentialVerifier:
    """Verifies bearer tokens.  Stateless apart from the JWKS cache."""

    def __init__(
        self,
        *,
        signing_key: str = "",
        algorithm: str = "HS256",
        audience: str = "",
        issuer: str = "",
        jwks_url: str = "",
        jwks_cache_seconds: int = 300,
    ) -> None:
        self._signing_key = signing_key
        self._algorithm = algorithm
        self._audience = audience or None
        self._issuer = issuer or None
        self._jwks_client: Optional[PyJWKClient] = None
        if jwks_url:
            self._jwks_client = PyJWKClient(
                jwks_url,
                cache_jwk_set=True,
                lifespan=jwks_cache_seconds,
            )

    @classmethod
    def from_settings(cls) -> CredentialVerifier:
        conf = settings.CATALOG_AUTH
        return cls(
            signing_key=conf.get("SIGNING_KEY", ""),
            algorithm=conf.get("ALGORITHM", "HS256"),
            audience=conf.get("AUDIENCE", ""),
            issuer=conf.get("ISSUER", ""),
            jwks_url=conf.get("JWKS_URL", ""),
            jwks_cache_seconds=conf.get("JWKS_CACHE_SECONDS", 300),
        )

    def verify(self, token: str) -> AuthenticatedIdentity:
        """Decode and validate ``token``.

        Raises:
            InvalidCredential: signature, expiry, audience, issuer or format
                check failed.
        """
        try:
            key = self._signing_key
            if self._jwks_client is not None:
                key = self._jwks_client.get_signing_key_from_jwt(token).key
            payload = pyjwt.decode(
                token,
                key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "require": ["exp"],
                    "verify_aud": self._audience is not None,
                },
            )
        except PyJWTError as exc:
            logger.warning("jwt_validation_failed", error=str(exc))
            raise InvalidCredential() from exc
        return AuthenticatedIdentity(payload)


@lru_cache(maxsize=1)
def default_verifier() -> CredentialVerifier:
    return CredentialVerifier.from_settings()


@receiver(setting_changed)
def _reset_verifier(*, setting: str, **kwargs) -> None:
    if setting == "CATALOG_AUTH":
        default_verifier.cache_clear()


class BearerTokenAuthentication(BaseAuthentication):
    """DRF authentication class for the protected product actions."""

    keyword = KEYWORD

    def authenticate(self, request):
        """Return ``(AuthenticatedIdentity, token)``.

        Unlike most DRF backends this never returns ``None``: it is only
        attached to routes where credentials are mandatory.
        """
        token = extract_bearer_token(request.META.get("HTTP_AUTHORIZATION"))
        identity = default_verifier().verify(token)
        structlog.contextvars.bind_contextvars(user=identity.email)
        logger.info("jwt_authenticated", sub=identity.subject)
        return (identity, token)

    def authenticate_header(self, request):
        """Value for the ``WWW-Authenticate`` response header on 401."""
        return f'{self.keyword} realm="api"'
