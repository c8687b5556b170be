# ecommerce/core/use_cases/__init__.py
"""
Core Use Cases (Application Logic).

This package contains the "Interactors" of the system. They orchestrate
the flow of data between the Domain Entities and the Infrastructure Ports.
Each use case represents a specific business action (e.g., "Register User",
"Add Order") and is responsible for:
1. Validating input.
2. Interacting with Ports (stores, token issuer, password hasher).
3. Returning Domain Entities or raising typed Domain Errors.
"""

from .login_user import LoginUser
from .orders import AddOrder, DeleteOrder, GetOrder, ListUserOrders, UpdateOrder
from .product_catalog import ProductCatalog
from .register_user import RegisterUser

__all__ = [
    "AddOrder",
    "DeleteOrder",
    "GetOrder",
    "ListUserOrders",
    "LoginUser",
    "ProductCatalog",
    "RegisterUser",
    "UpdateOrder",
]
