# ecommerce/adapters/persistence/sql_repo.py
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ecommerce.adapters.persistence.database import Database
from ecommerce.adapters.persistence.tables import OrderItemRow, OrderRow, ProductRow, UserRow
from ecommerce.core.domain.exceptions import DuplicateProductError, DuplicateUserError
from ecommerce.core.domain.models import (
    Order,
    OrderItem,
    Product,
    User,
    normalize_email,
    to_money,
)
from ecommerce.core.ports.order_repository import IOrderRepository
from ecommerce.core.ports.product_repository import IProductRepository
from ecommerce.core.ports.user_repository import IUserRepository

logger = structlog.get_logger()


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Row <-> domain mapping
# ---------------------------------------------------------------------------


def _user_to_domain(row: UserRow) -> User:
    return User(
        id=UUID(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        password_hash=row.password_hash,
        is_active=row.is_active,
        created_at=_aware(row.created_at),
    )


def _product_to_domain(row: ProductRow) -> Product:
    return Product(
        id=UUID(row.id),
        name=row.name,
        description=row.description or "",
        price=to_money(row.price),
        currency=row.currency,
        brand=row.brand,
        category=row.category,
        stock_quantity=row.stock_quantity,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _apply_product(row: ProductRow, product: Product) -> None:
    row.name = product.name
    row.description = product.description
    row.price = product.price
    row.currency = product.currency
    row.brand = product.brand
    row.category = product.category
    row.stock_quantity = product.stock_quantity
    row.created_at = product.created_at
    row.updated_at = product.updated_at


def _item_rows(order: Order) -> List[OrderItemRow]:
    return [
        OrderItemRow(
            position=position,
            product_id=str(item.product_id),
            quantity=item.quantity,
            unit_price=item.unit_price,
        )
        for position, item in enumerate(order.items)
    ]


def _order_to_domain(row: OrderRow) -> Order:
    order_id = UUID(row.id)
    return Order(
        id=order_id,
        name=row.name,
        items=tuple(
            OrderItem(
                product_id=UUID(item.product_id),
                quantity=item.quantity,
                unit_price=to_money(item.unit_price),
                order_id=order_id,
            )
            for item in row.items
        ),
        total_amount=to_money(row.total_amount),
        user_id=UUID(row.user_id),
        created_at=_aware(row.created_at),
    )


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class SqlUserRepository(IUserRepository):
    """Identity Store backed by the `users` table."""

    def __init__(self, database: Database):
        self._db = database

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserRow).where(UserRow.email == normalize_email(email))
        async with self._db.session() as session:
            row = (await session.execute(stmt)).scalar_one_or_none()
            return _user_to_domain(row) if row else None

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        async with self._db.session() as session:
            row = await session.get(UserRow, str(user_id))
            return _user_to_domain(row) if row else None

    async def add(self, user: User) -> User:
        row = UserRow(
            id=str(user.id),
            first_name=user.first_name,
            last_name=user.last_name,
            email=normalize_email(user.email),
            password_hash=user.password_hash,
            is_active=user.is_active,
            created_at=user.created_at,
        )
        try:
            async with self._db.session() as session:
                session.add(row)
        except IntegrityError as e:
            raise DuplicateUserError(user.email) from e

        logger.debug("user_stored", backend="sql", user_id=str(user.id))
        return user

    async def health_check(self) -> bool:
        return await self._db.health_check()


class SqlOrderRepository(IOrderRepository):
    """
    Order Store backed by `orders` + `order_items`.
    An order and its items are always written in the same transaction.
    """

    def __init__(self, database: Database):
        self._db = database

    async def add(self, order: Order) -> Order:
        row = OrderRow(
            id=str(order.id),
            name=order.name,
            total_amount=order.total_amount,
            user_id=str(order.user_id),
            created_at=order.created_at,
        )
        row.items = _item_rows(order)
        async with self._db.session() as session:
            session.add(row)
        return order

    async def get_by_id(self, order_id: UUID) -> Optional[Order]:
        async with self._db.session() as session:
            row = await session.get(OrderRow, str(order_id))
            return _order_to_domain(row) if row else None

    async def list_by_user(self, user_id: UUID) -> List[Order]:
        stmt = (
            select(OrderRow)
            .where(OrderRow.user_id == str(user_id))
            .order_by(OrderRow.created_at, OrderRow.id)
        )
        async with self._db.session() as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_order_to_domain(row) for row in rows]

    async def replace(self, order: Order) -> Optional[Order]:
        async with self._db.session() as session:
            row = await session.get(OrderRow, str(order.id))
            if row is None:
                return None
            row.name = order.name
            row.total_amount = order.total_amount
            # delete-orphan drops the previous items.
            row.items = _item_rows(order)
        return order

    async def delete(self, order_id: UUID) -> Optional[Order]:
        async with self._db.session() as session:
            row = await session.get(OrderRow, str(order_id))
            if row is None:
                return None
            removed = _order_to_domain(row)
            await session.delete(row)
        return removed

    async def health_check(self) -> bool:
        return await self._db.health_check()


class SqlProductRepository(IProductRepository):
    def __init__(self, database: Database):
        self._db = database

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        async with self._db.session() as session:
            row = await session.get(ProductRow, str(product_id))
            return _product_to_domain(row) if row else None

    async def get_by_name(self, name: str) -> Optional[Product]:
        stmt = select(ProductRow).where(ProductRow.name == name)
        async with self._db.session() as session:
            row = (await session.execute(stmt)).scalar_one_or_none()
            return _product_to_domain(row) if row else None

    async def list_all(self) -> List[Product]:
        stmt = select(ProductRow).order_by(ProductRow.name)
        async with self._db.session() as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_product_to_domain(row) for row in rows]

    async def add(self, product: Product) -> Product:
        row = ProductRow(id=str(product.id))
        _apply_product(row, product)
        try:
            async with self._db.session() as session:
                session.add(row)
        except IntegrityError as e:
            raise DuplicateProductError(product.name) from e
        return product

    async def update(self, product: Product) -> Optional[Product]:
        try:
            async with self._db.session() as session:
                row = await session.get(ProductRow, str(product.id))
                if row is None:
                    return None
                _apply_product(row, product)
        except IntegrityError as e:
            raise DuplicateProductError(product.name) from e
        return product

    async def delete(self, product_id: UUID) -> bool:
        async with self._db.session() as session:
            row = await session.get(ProductRow, str(product_id))
            if row is None:
                return False
            await session.delete(row)
        return True

    async def health_check(self) -> bool:
        return await self._db.health_check()
