# ecommerce/core/ports/__init__.py
"""
Core Ports (Interfaces).

This package defines the Protocols that the Infrastructure Adapters must
implement. These interfaces allow the Core Domain to talk to storage,
token signing and password hashing without knowing the implementation details.
"""

from .clock import IClock
from .order_repository import IOrderRepository
from .password_hasher import IPasswordHasher
from .product_repository import IProductRepository
from .token_issuer import ITokenIssuer
from .user_repository import IUserRepository

__all__ = [
    "IClock",
    "IOrderRepository",
    "IPasswordHasher",
    "IProductRepository",
    "ITokenIssuer",
    "IUserRepository",
]
