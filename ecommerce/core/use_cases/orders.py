# ecommerce/core/use_cases/orders.py
from typing import List, Sequence
from uuid import UUID

import structlog

from ecommerce.core.domain.exceptions import OrderNotFoundError, UserNotFoundError, ValidationError
from ecommerce.core.domain.models import Order, OrderItem, OrderLine
from ecommerce.core.ports.clock import IClock
from ecommerce.core.ports.order_repository import IOrderRepository
from ecommerce.core.ports.product_repository import IProductRepository
from ecommerce.core.ports.user_repository import IUserRepository
from ecommerce.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)


def _require_lines(name: str, lines: Sequence[OrderLine]) -> None:
    """Cheap shape checks, done before any catalog lookups."""
    if not name or not name.strip():
        raise ValidationError("order name cannot be empty")
    if not lines:
        raise ValidationError("order must contain at least one item")
    for line in lines:
        if line.quantity <= 0:
            raise ValidationError(
                f"quantity for product '{line.product_id}' must be greater than zero"
            )


async def _price_lines(products: IProductRepository, lines: Sequence[OrderLine]) -> List[OrderItem]:
    """Resolves the current catalog price of every requested product."""
    items = []
    for line in lines:
        product = await products.get_by_id(line.product_id)
        if product is None:
            raise ValidationError(f"unknown product '{line.product_id}'")
        items.append(
            OrderItem(product_id=product.id, quantity=line.quantity, unit_price=product.price)
        )
    return items


class AddOrder:
    """
    Use Case: Places an order for a user.

    Responsibilities:
    1. Validates the order name and line items.
    2. Prices each line from the product catalog.
    3. Builds the Order aggregate (total amount, item back-references).
    4. Persists it.
    """

    def __init__(
        self,
        orders: IOrderRepository,
        products: IProductRepository,
        users: IUserRepository,
        clock: IClock,
    ):
        self.orders = orders
        self.products = products
        self.users = users
        self.clock = clock

    async def execute(self, name: str, lines: Sequence[OrderLine], user_id: UUID) -> Order:
        with tracer.start_as_current_span("use_case.add_order") as span:
            span.set_attribute("app.user_id", str(user_id))
            _require_lines(name, lines)

            if await self.users.get_by_id(user_id) is None:
                raise UserNotFoundError(str(user_id))

            items = await _price_lines(self.products, lines)
            order = Order.create(
                name=name,
                items=items,
                user_id=user_id,
                created_at=self.clock.now(),
            )
            order = await self.orders.add(order)

            span.set_attribute("app.order_id", str(order.id))
            logger.info(
                "order_created",
                order_id=str(order.id),
                user_id=str(user_id),
                items=len(order.items),
                total=str(order.total_amount),
            )
            return order


class GetOrder:
    def __init__(self, orders: IOrderRepository):
        self.orders = orders

    async def execute(self, order_id: UUID) -> Order:
        order = await self.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order


class ListUserOrders:
    """Use Case: All orders placed by one user, oldest first."""

    def __init__(self, orders: IOrderRepository):
        self.orders = orders

    async def execute(self, user_id: UUID) -> List[Order]:
        return await self.orders.list_by_user(user_id)


class UpdateOrder:
    """
    Use Case: Replaces the name and items of an existing order.

    Items are replaced wholesale and re-priced from the catalog; the total is
    recomputed. Owner and creation time are kept.
    """

    def __init__(self, orders: IOrderRepository, products: IProductRepository):
        self.orders = orders
        self.products = products

    async def execute(self, order_id: UUID, name: str, lines: Sequence[OrderLine]) -> Order:
        with tracer.start_as_current_span("use_case.update_order") as span:
            span.set_attribute("app.order_id", str(order_id))

            existing = await self.orders.get_by_id(order_id)
            if existing is None:
                raise OrderNotFoundError(order_id)

            _require_lines(name, lines)
            items = await _price_lines(self.products, lines)
            replacement = Order.create(
                name=name,
                items=items,
                user_id=existing.user_id,
                order_id=existing.id,
                created_at=existing.created_at,
            )

            stored = await self.orders.replace(replacement)
            if stored is None:
                # Deleted between the read and the write.
                raise OrderNotFoundError(order_id)

            logger.info("order_updated", order_id=str(order_id), total=str(stored.total_amount))
            return stored


class DeleteOrder:
    """Use Case: Removes an order, returning the value it had."""

    def __init__(self, orders: IOrderRepository):
        self.orders = orders

    async def execute(self, order_id: UUID) -> Order:
        removed = await self.orders.delete(order_id)
        if removed is None:
            raise OrderNotFoundError(order_id)
        logger.info("order_deleted", order_id=str(order_id))
        return removed
