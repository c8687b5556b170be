# ecommerce/adapters/api/schemas.py

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Base / shared types
# ---------------------------------------------------------------------------


class APIModel(BaseModel):
    """
    Base model for all HTTP schemas.

    JSON uses camelCase (`firstName`, `totalAmount`); Python code keeps
    snake_case field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(APIModel):
    # Unknown keys in a request body are rejected early.
    model_config = ConfigDict(extra="forbid")


class ErrorResponse(APIModel):
    status: str = "error"
    code: int
    message: str


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class RegisterRequest(RequestModel):
    first_name: str
    last_name: str
    email: str
    password: str


class LoginRequest(RequestModel):
    email: str
    password: str


class AuthResponse(APIModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    token: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


class OrderLineRequest(RequestModel):
    product_id: UUID
    quantity: int


class OrderRequest(RequestModel):
    name: str
    items: List[OrderLineRequest] = Field(default_factory=list)


class OrderItemResponse(APIModel):
    product_id: UUID
    quantity: int
    unit_price: Decimal


class OrderResponse(APIModel):
    """Order as returned to clients. Amounts serialize as decimal strings ("35.00")."""

    id: UUID
    name: str
    total_amount: Decimal
    user_id: UUID
    created_at: datetime
    items: List[OrderItemResponse]


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class ProductCreate(RequestModel):
    name: str
    description: str = ""
    price: Decimal
    currency: str = "USD"
    brand: Optional[str] = None
    category: Optional[str] = None
    stock_quantity: int = 0


class ProductUpdate(RequestModel):
    """Partial update; omitted fields are left unchanged, null clears brand/category."""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    currency: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    stock_quantity: Optional[int] = None


class ProductResponse(APIModel):
    id: UUID
    name: str
    description: str
    price: Decimal
    currency: str
    brand: Optional[str] = None
    category: Optional[str] = None
    stock_quantity: int
    created_at: datetime
    updated_at: datetime
