# ecommerce/shared/container.py
from typing import Optional

from dependency_injector import containers, providers

from ecommerce.shared.config import Settings, settings as default_settings
from ecommerce.adapters.persistence.database import Database
from ecommerce.adapters.persistence.memory_repo import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)
from ecommerce.adapters.persistence.sql_repo import (
    SqlOrderRepository,
    SqlProductRepository,
    SqlUserRepository,
)
from ecommerce.adapters.security.bcrypt_hasher import BcryptPasswordHasher
from ecommerce.adapters.security.clock import SystemClock
from ecommerce.adapters.security.jwt_issuer import JwtTokenIssuer

from ecommerce.core.use_cases.login_user import LoginUser
from ecommerce.core.use_cases.orders import (
    AddOrder,
    DeleteOrder,
    GetOrder,
    ListUserOrders,
    UpdateOrder,
)
from ecommerce.core.use_cases.product_catalog import ProductCatalog
from ecommerce.core.use_cases.register_user import RegisterUser


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    This declarative container defines the assembly instructions for the application.
    Populate `config` through `build_container` (or `config.from_dict` in tests).
    """

    # 1. Configuration
    config = providers.Configuration()

    # 2. Gateways (Infrastructure Adapters)

    clock = providers.Singleton(SystemClock)

    password_hasher = providers.Singleton(
        BcryptPasswordHasher,
        rounds=config.BCRYPT_ROUNDS,
    )

    token_issuer = providers.Singleton(
        JwtTokenIssuer,
        secret=config.JWT_SECRET,
        clock=clock,
        issuer=config.JWT_ISSUER,
        algorithm=config.JWT_ALGORITHM,
        lifetime_minutes=config.JWT_EXPIRY_MINUTES,
    )

    # Engine + session factory; only built when the SQL backend is selected.
    database = providers.Singleton(
        Database,
        url=config.DATABASE_URL,
        echo=config.DEBUG,
    )

    # Persistence (Selector: STORAGE_BACKEND picks memory or sql)
    user_repository = providers.Selector(
        config.STORAGE_BACKEND,
        memory=providers.Singleton(InMemoryUserRepository),
        sql=providers.Singleton(SqlUserRepository, database=database),
    )

    order_repository = providers.Selector(
        config.STORAGE_BACKEND,
        memory=providers.Singleton(InMemoryOrderRepository),
        sql=providers.Singleton(SqlOrderRepository, database=database),
    )

    product_repository = providers.Selector(
        config.STORAGE_BACKEND,
        memory=providers.Singleton(InMemoryProductRepository),
        sql=providers.Singleton(SqlProductRepository, database=database),
    )

    # 3. Use Cases (Application Logic)

    # Factory: New instance created for every request (stateless logic),
    # but with Singleton dependencies injected.

    register_user_use_case = providers.Factory(
        RegisterUser,
        users=user_repository,
        hasher=password_hasher,
        tokens=token_issuer,
        clock=clock,
        password_min_length=config.PASSWORD_MIN_LENGTH,
    )

    login_user_use_case = providers.Factory(
        LoginUser,
        users=user_repository,
        hasher=password_hasher,
        tokens=token_issuer,
    )

    add_order_use_case = providers.Factory(
        AddOrder,
        orders=order_repository,
        products=product_repository,
        users=user_repository,
        clock=clock,
    )

    get_order_use_case = providers.Factory(GetOrder, orders=order_repository)

    list_user_orders_use_case = providers.Factory(ListUserOrders, orders=order_repository)

    update_order_use_case = providers.Factory(
        UpdateOrder,
        orders=order_repository,
        products=product_repository,
    )

    delete_order_use_case = providers.Factory(DeleteOrder, orders=order_repository)

    product_catalog = providers.Factory(
        ProductCatalog,
        products=product_repository,
        clock=clock,
    )


def build_container(settings: Optional[Settings] = None) -> Container:
    """
    Creates a container bound to `settings`.
    Enum values are dumped as plain strings so the Selector keys match.
    """
    container = Container()
    container.config.from_dict((settings or default_settings).model_dump(mode="json"))
    return container
