# ecommerce/adapters/security/bcrypt_hasher.py
import bcrypt

from ecommerce.core.ports.password_hasher import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """Salted bcrypt hashes; `rounds` is the log2 work factor."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
        except ValueError:
            # Malformed stored hash or over-long password.
            return False
