# ecommerce/core/ports/product_repository.py
from typing import List, Optional, Protocol
from uuid import UUID

from ecommerce.core.domain.models import Product

class IProductRepository(Protocol):
    """
    Port for the product catalog.
    """

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        ...

    async def get_by_name(self, name: str) -> Optional[Product]:
        ...

    async def list_all(self) -> List[Product]:
        ...

    async def add(self, product: Product) -> Product:
        """
        Raises:
            DuplicateProductError: If the name is already taken.
        """
        ...

    async def update(self, product: Product) -> Optional[Product]:
        """
        Returns None if the product does not exist.

        Raises:
            DuplicateProductError: If the new name belongs to another product.
        """
        ...

    async def delete(self, product_id: UUID) -> bool:
        """Returns True if a product was removed."""
        ...

    async def health_check(self) -> bool:
        ...
