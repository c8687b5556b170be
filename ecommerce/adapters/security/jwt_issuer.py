# ecommerce/adapters/security/jwt_issuer.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from uuid import UUID

import jwt

from ecommerce.core.domain.exceptions import InvalidTokenError
from ecommerce.core.domain.models import TokenClaims
from ecommerce.core.ports.clock import IClock
from ecommerce.core.ports.token_issuer import ITokenIssuer

REQUIRED_CLAIMS = ["sub", "given_name", "family_name", "jti", "iss", "iat", "nbf", "exp"]


def _from_timestamp(value: Any) -> datetime:
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


class JwtTokenIssuer(ITokenIssuer):
    """
    Issues compact HS256 JWTs (RFC 7519).

    Time-based checks (`exp`, `nbf`) are evaluated against the injected clock
    rather than PyJWT's wall clock, so tests can pin the current time.
    """

    def __init__(
        self,
        secret: str,
        clock: IClock,
        issuer: str = "Ecommerce",
        algorithm: str = "HS256",
        lifetime_minutes: int = 60,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._clock = clock
        self.issuer = issuer
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=lifetime_minutes)

    def issue(self, user_id: UUID, first_name: str, last_name: str) -> str:
        now = self._clock.now().replace(microsecond=0)
        payload: Dict[str, Any] = {
            "sub": str(user_id),
            "given_name": first_name,
            "family_name": last_name,
            "jti": str(uuid.uuid4()),
            "iss": self.issuer,
            "iat": now,
            "nbf": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        now = self._clock.now()
        not_before = _from_timestamp(payload["nbf"])
        expires = _from_timestamp(payload["exp"])
        if now < not_before:
            raise InvalidTokenError("token is not yet valid")
        if now >= expires:
            raise InvalidTokenError("token has expired")

        try:
            return TokenClaims(
                sub=UUID(payload["sub"]),
                given_name=payload["given_name"],
                family_name=payload["family_name"],
                jti=payload["jti"],
                iss=payload["iss"],
                iat=_from_timestamp(payload["iat"]),
                nbf=not_before,
                exp=expires,
            )
        except ValueError as e:
            raise InvalidTokenError(f"malformed claims: {e}") from e
