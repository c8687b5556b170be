# ecommerce/core/ports/password_hasher.py
from typing import Protocol

class IPasswordHasher(Protocol):
    """Port for one-way password hashing."""

    def hash(self, password: str) -> str:
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        ...
