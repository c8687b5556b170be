# ecommerce/core/ports/user_repository.py
from typing import Protocol, Optional
from uuid import UUID

from ecommerce.core.domain.models import User

class IUserRepository(Protocol):
    """
    Port for the Identity Store.
    Implementations: InMemoryUserRepository, SqlUserRepository.
    """

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Looks up a user by normalised (lower-cased) email.

        Returns:
            The User if found, None otherwise.
        """
        ...

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    async def add(self, user: User) -> User:
        """
        Persists a new user.

        The uniqueness check and the insert are a single atomic step.

        Raises:
            DuplicateUserError: If the email is already registered.
        """
        ...

    async def health_check(self) -> bool:
        """Returns True if the underlying storage is accessible."""
        ...
