# ecommerce/core/domain/models.py
import re
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ecommerce.core.domain.exceptions import ValidationError

CENTS = Decimal("0.01")

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_money(value) -> Decimal:
    """Quantizes a price or amount to two decimal places (half-up)."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

# --- Identity ---

class User(BaseModel):
    """
    A registered customer.
    Only the bcrypt hash of the password is ever held.
    """
    id: UUID = Field(default_factory=uuid4)
    first_name: str
    last_name: str
    email: str
    password_hash: str
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(frozen=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

class AuthResult(BaseModel):
    """Outcome of a successful registration or login."""
    id: UUID
    first_name: str
    last_name: str
    email: str
    token: str

    model_config = ConfigDict(frozen=True)

class TokenClaims(BaseModel):
    """Decoded, verified claim set of an access token."""
    sub: UUID
    given_name: str
    family_name: str
    jti: str
    iss: str
    iat: datetime
    nbf: datetime
    exp: datetime

    model_config = ConfigDict(frozen=True)

# --- Catalog ---

class Product(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1)
    description: str = ""
    price: Decimal = Field(..., ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    brand: Optional[str] = None
    category: Optional[str] = None
    stock_quantity: int = Field(0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("product name cannot be blank")
        return value

    @field_validator("price")
    @classmethod
    def quantize_price(cls, value: Decimal) -> Decimal:
        return to_money(value)

# --- Orders ---

class OrderLine(BaseModel):
    """A requested line before prices are resolved: (product reference, quantity)."""
    product_id: UUID
    quantity: int

    model_config = ConfigDict(frozen=True)

class OrderItem(BaseModel):
    """
    A priced line of an order.
    `unit_price` is the product price captured when the order was placed.
    """
    product_id: UUID
    quantity: int
    unit_price: Decimal
    order_id: Optional[UUID] = None

    model_config = ConfigDict(frozen=True)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

def calculate_total(items: Iterable[OrderItem]) -> Decimal:
    """Sum of unit price x quantity over all items."""
    return to_money(sum((item.line_total for item in items), Decimal("0")))

class Order(BaseModel):
    """
    Order aggregate: the order and its items form one consistency unit.
    Build new orders through `Order.create` so the invariants hold.
    """
    id: UUID = Field(default_factory=uuid4)
    name: str
    items: Tuple[OrderItem, ...]
    total_amount: Decimal
    user_id: UUID
    created_at: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def create(
        cls,
        *,
        name: str,
        items: Iterable[OrderItem],
        user_id: UUID,
        order_id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
    ) -> "Order":
        """
        Validates the name and items, binds every item to the order and
        computes the total amount.

        Raises:
            ValidationError: blank name, no items, non-positive quantity
                or negative unit price.
        """
        if not name or not name.strip():
            raise ValidationError("order name cannot be empty")

        items = list(items)
        if not items:
            raise ValidationError("order must contain at least one item")

        for item in items:
            if item.quantity <= 0:
                raise ValidationError(
                    f"quantity for product '{item.product_id}' must be greater than zero"
                )
            if item.unit_price < 0:
                raise ValidationError(
                    f"unit price for product '{item.product_id}' cannot be negative"
                )

        order_id = order_id or uuid4()
        bound = tuple(
            item.model_copy(update={"order_id": order_id, "unit_price": to_money(item.unit_price)})
            for item in items
        )
        return cls(
            id=order_id,
            name=name.strip(),
            items=bound,
            total_amount=calculate_total(bound),
            user_id=user_id,
            created_at=created_at or utcnow(),
        )
