# ecommerce/adapters/api/dependencies.py
from __future__ import annotations

from typing import Optional

import structlog
from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ecommerce.core.domain.exceptions import InvalidTokenError
from ecommerce.core.domain.models import TokenClaims
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
from ecommerce.shared.container import Container

logger = structlog.get_logger()


# -----------------------------------------------------------------------------
# Container access
# -----------------------------------------------------------------------------
def get_container(request: Request) -> Container:
    """The container built by `create_app`, stored on the application state."""
    return request.app.state.container


# -----------------------------------------------------------------------------
# Security: Bearer token
# -----------------------------------------------------------------------------
bearer_scheme = HTTPBearer(auto_error=False)

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    container: Container = Depends(get_container),
) -> TokenClaims:
    """
    Validates the `Authorization: Bearer <jwt>` header.
    Returns the verified claims; `claims.sub` is the caller's user id.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers=_CHALLENGE,
        )

    try:
        return container.token_issuer().decode(credentials.credentials)
    except InvalidTokenError as e:
        logger.info("token_rejected", reason=e.reason)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers=_CHALLENGE,
        )


# -----------------------------------------------------------------------------
# Use case injection
# -----------------------------------------------------------------------------
def get_register_user_use_case(container: Container = Depends(get_container)) -> RegisterUser:
    return container.register_user_use_case()


def get_login_user_use_case(container: Container = Depends(get_container)) -> LoginUser:
    return container.login_user_use_case()


def get_add_order_use_case(container: Container = Depends(get_container)) -> AddOrder:
    return container.add_order_use_case()


def get_get_order_use_case(container: Container = Depends(get_container)) -> GetOrder:
    return container.get_order_use_case()


def get_list_user_orders_use_case(container: Container = Depends(get_container)) -> ListUserOrders:
    return container.list_user_orders_use_case()


def get_update_order_use_case(container: Container = Depends(get_container)) -> UpdateOrder:
    return container.update_order_use_case()


def get_delete_order_use_case(container: Container = Depends(get_container)) -> DeleteOrder:
    return container.delete_order_use_case()


def get_product_catalog(container: Container = Depends(get_container)) -> ProductCatalog:
    return container.product_catalog()
