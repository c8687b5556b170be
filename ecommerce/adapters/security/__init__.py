# ecommerce/adapters/security/__init__.py
"""
Security Adapters.

Concrete implementations of the token, password and clock ports:
- JwtTokenIssuer: HS256 JWTs via PyJWT.
- BcryptPasswordHasher: salted bcrypt hashes.
- SystemClock: UTC wall clock.
"""

from .bcrypt_hasher import BcryptPasswordHasher
from .clock import SystemClock
from .jwt_issuer import JwtTokenIssuer

__all__ = [
    "BcryptPasswordHasher",
    "JwtTokenIssuer",
    "SystemClock",
]
