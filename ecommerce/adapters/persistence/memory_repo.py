# ecommerce/adapters/persistence/memory_repo.py
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

import structlog

from ecommerce.core.domain.exceptions import DuplicateProductError, DuplicateUserError
from ecommerce.core.domain.models import Order, Product, User, normalize_email
from ecommerce.core.ports.order_repository import IOrderRepository
from ecommerce.core.ports.product_repository import IProductRepository
from ecommerce.core.ports.user_repository import IUserRepository

logger = structlog.get_logger()


class InMemoryUserRepository(IUserRepository):
    """
    Process-local Identity Store.

    The email index is checked and written under one lock, so two concurrent
    registrations for the same address cannot both succeed.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._by_id: Dict[UUID, User] = {}
        self._id_by_email: Dict[str, UUID] = {}

    async def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._id_by_email.get(normalize_email(email))
            return self._by_id.get(user_id) if user_id else None

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._by_id.get(user_id)

    async def add(self, user: User) -> User:
        key = normalize_email(user.email)
        with self._lock:
            if key in self._id_by_email:
                raise DuplicateUserError(key)
            self._by_id[user.id] = user
            self._id_by_email[key] = user.id
        logger.debug("user_stored", backend="memory", user_id=str(user.id))
        return user

    async def health_check(self) -> bool:
        return True


class InMemoryOrderRepository(IOrderRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._orders: Dict[UUID, Order] = {}

    async def add(self, order: Order) -> Order:
        with self._lock:
            self._orders[order.id] = order
        return order

    async def get_by_id(self, order_id: UUID) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    async def list_by_user(self, user_id: UUID) -> List[Order]:
        with self._lock:
            owned = [o for o in self._orders.values() if o.user_id == user_id]
        return sorted(owned, key=lambda o: o.created_at)

    async def replace(self, order: Order) -> Optional[Order]:
        with self._lock:
            if order.id not in self._orders:
                return None
            self._orders[order.id] = order
        return order

    async def delete(self, order_id: UUID) -> Optional[Order]:
        with self._lock:
            return self._orders.pop(order_id, None)

    async def health_check(self) -> bool:
        return True


class InMemoryProductRepository(IProductRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._products: Dict[UUID, Product] = {}

    def _find_name(self, name: str) -> Optional[Product]:
        return next((p for p in self._products.values() if p.name == name), None)

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        with self._lock:
            return self._products.get(product_id)

    async def get_by_name(self, name: str) -> Optional[Product]:
        with self._lock:
            return self._find_name(name)

    async def list_all(self) -> List[Product]:
        with self._lock:
            return sorted(self._products.values(), key=lambda p: p.name)

    async def add(self, product: Product) -> Product:
        with self._lock:
            if self._find_name(product.name) is not None:
                raise DuplicateProductError(product.name)
            self._products[product.id] = product
        return product

    async def update(self, product: Product) -> Optional[Product]:
        with self._lock:
            if product.id not in self._products:
                return None
            clash = self._find_name(product.name)
            if clash is not None and clash.id != product.id:
                raise DuplicateProductError(product.name)
            self._products[product.id] = product
        return product

    async def delete(self, product_id: UUID) -> bool:
        with self._lock:
            return self._products.pop(product_id, None) is not None

    async def health_check(self) -> bool:
        return True
