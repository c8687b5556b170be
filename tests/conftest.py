# tests/conftest.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from unittest.mock import AsyncMock, MagicMock

from ecommerce.shared.config import AppEnv, Settings, StorageBackend
from ecommerce.shared.container import build_container
from ecommerce.adapters.security.bcrypt_hasher import BcryptPasswordHasher
from ecommerce.adapters.security.jwt_issuer import JwtTokenIssuer
from ecommerce.core.domain.models import User
from ecommerce.core.ports.order_repository import IOrderRepository
from ecommerce.core.ports.product_repository import IProductRepository
from ecommerce.core.ports.user_repository import IUserRepository

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"
TEST_PASSWORD = "correct horse battery"


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta


@pytest.fixture(scope="function")
def clock():
    return FixedClock(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture(scope="function")
def hasher():
    """Real bcrypt with the minimum work factor to keep the suite fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture(scope="function")
def token_issuer(clock):
    return JwtTokenIssuer(secret=TEST_SECRET, clock=clock)


@pytest.fixture(scope="function")
def test_settings():
    return Settings(
        APP_ENV=AppEnv.TESTING,
        JWT_SECRET=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        STORAGE_BACKEND=StorageBackend.MEMORY,
        LOG_LEVEL="WARNING",
        LOG_FORMAT="console",
        OTEL_EXPORTER_OTLP_ENDPOINT=None,
    )


@pytest.fixture(scope="function")
def container(test_settings, clock):
    """
    Sets up the Dependency Injection Container for testing.
    In-memory stores are used; the system clock is replaced by `clock`.
    """
    container = build_container(test_settings)
    container.clock.override(clock)

    yield container

    container.reset_override()


# ---------------------------------------------------------------------------
# Mocked ports
# ---------------------------------------------------------------------------


@pytest.fixture(scope="function")
def mock_user_repo():
    """Returns a mock Identity Store."""
    repo = MagicMock(spec=IUserRepository)
    repo.get_by_email = AsyncMock(return_value=None)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.add = AsyncMock(side_effect=lambda user: user)
    repo.health_check = AsyncMock(return_value=True)
    return repo


@pytest.fixture(scope="function")
def mock_order_repo():
    repo = MagicMock(spec=IOrderRepository)
    repo.add = AsyncMock(side_effect=lambda order: order)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.list_by_user = AsyncMock(return_value=[])
    repo.replace = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=None)
    repo.health_check = AsyncMock(return_value=True)
    return repo


@pytest.fixture(scope="function")
def mock_product_repo():
    repo = MagicMock(spec=IProductRepository)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_by_name = AsyncMock(return_value=None)
    repo.list_all = AsyncMock(return_value=[])
    repo.add = AsyncMock(side_effect=lambda product: product)
    repo.update = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=False)
    repo.health_check = AsyncMock(return_value=True)
    return repo


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------


@pytest.fixture
async def stored_user(container, hasher, clock):
    """An active customer already present in the in-memory Identity Store."""
    user = User(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password_hash=hasher.hash(TEST_PASSWORD),
        created_at=clock.now(),
    )
    return await container.user_repository().add(user)


@pytest.fixture
async def catalog_products(container):
    """Two products priced 10.00 and 15.00."""
    catalog = container.product_catalog()
    widget = await catalog.add(name="Widget", price=Decimal("10.00"), stock_quantity=5)
    gadget = await catalog.add(name="Gadget", price=Decimal("15.00"), brand="Acme")
    return widget, gadget
