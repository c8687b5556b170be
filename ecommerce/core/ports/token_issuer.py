# ecommerce/core/ports/token_issuer.py
from typing import Protocol
from uuid import UUID

from ecommerce.core.domain.models import TokenClaims

class ITokenIssuer(Protocol):
    """
    Port for producing and verifying signed access tokens.
    Implementation: JwtTokenIssuer (PyJWT, HS256).
    """

    def issue(self, user_id: UUID, first_name: str, last_name: str) -> str:
        """
        Returns a signed, time-bounded token embedding the user's id and names.
        """
        ...

    def decode(self, token: str) -> TokenClaims:
        """
        Verifies and decodes a token.

        Raises:
            InvalidTokenError: On a bad signature, wrong issuer, or a token
                that is expired or not yet valid.
        """
        ...
