# ecommerce/core/use_cases/product_catalog.py
from typing import Any, Dict, List
from uuid import UUID

import pydantic
import structlog

from ecommerce.core.domain.exceptions import (
    DuplicateProductError,
    ProductNotFoundError,
    ValidationError,
)
from ecommerce.core.domain.models import Product
from ecommerce.core.ports.clock import IClock
from ecommerce.core.ports.product_repository import IProductRepository

logger = structlog.get_logger()

_IMMUTABLE_FIELDS = {"id", "created_at", "updated_at"}

# Optional attributes an explicit None clears.
_CLEARABLE_FIELDS = {"brand", "category"}


def _build_product(data: Dict[str, Any]) -> Product:
    try:
        return Product.model_validate(data)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationError(f"{field}: {first['msg']}") from e


class ProductCatalog:
    """
    High-level service for the product catalog.

    Responsibilities:
    - Enforce simple business rules (unique name, non-negative price).
    - Delegate persistence to `IProductRepository`.
    """

    def __init__(self, products: IProductRepository, clock: IClock) -> None:
        self._products = products
        self._clock = clock

    async def get_by_id(self, product_id: UUID) -> Product:
        product = await self._products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def get_all(self) -> List[Product]:
        return await self._products.list_all()

    async def add(self, **fields: Any) -> Product:
        """
        Create a new product.
        Enforces name uniqueness.
        """
        now = self._clock.now()
        product = _build_product({**fields, "created_at": now, "updated_at": now})

        if await self._products.get_by_name(product.name) is not None:
            raise DuplicateProductError(product.name)

        product = await self._products.add(product)
        logger.info("product_created", product_id=str(product.id), name=product.name)
        return product

    async def update(self, product_id: UUID, **changes: Any) -> Product:
        """
        Apply partial updates. None clears `brand`/`category` and leaves
        every other field untouched.
        """
        existing = await self.get_by_id(product_id)

        updates = {
            key: value
            for key, value in changes.items()
            if key not in _IMMUTABLE_FIELDS
            and (value is not None or key in _CLEARABLE_FIELDS)
        }
        merged = existing.model_dump()
        merged.update(updates)
        merged["updated_at"] = self._clock.now()
        product = _build_product(merged)

        if product.name != existing.name:
            clash = await self._products.get_by_name(product.name)
            if clash is not None and clash.id != product_id:
                raise DuplicateProductError(product.name)

        stored = await self._products.update(product)
        if stored is None:
            raise ProductNotFoundError(product_id)
        logger.info("product_updated", product_id=str(product_id), fields=sorted(updates))
        return stored

    async def delete(self, product_id: UUID) -> None:
        if not await self._products.delete(product_id):
            raise ProductNotFoundError(product_id)
        logger.info("product_deleted", product_id=str(product_id))

    async def delete_by_name(self, name: str) -> None:
        product = await self._products.get_by_name(name)
        if product is None:
            raise ProductNotFoundError(name)
        await self.delete(product.id)
