# ecommerce/core/ports/order_repository.py
from typing import List, Optional, Protocol
from uuid import UUID

from ecommerce.core.domain.models import Order

class IOrderRepository(Protocol):
    """
    Port for persisting Order aggregates (the order together with its items).
    """

    async def add(self, order: Order) -> Order:
        ...

    async def get_by_id(self, order_id: UUID) -> Optional[Order]:
        ...

    async def list_by_user(self, user_id: UUID) -> List[Order]:
        """Orders owned by `user_id`, oldest first."""
        ...

    async def replace(self, order: Order) -> Optional[Order]:
        """
        Overwrites the stored order (name, items, total) with `order`.
        Returns None if no order with that id exists.
        """
        ...

    async def delete(self, order_id: UUID) -> Optional[Order]:
        """
        Removes an order and returns the value it had, or None if absent.
        """
        ...

    async def health_check(self) -> bool:
        ...
