# ecommerce/adapters/persistence/__init__.py
"""
Persistence adapters.

Two interchangeable backends implement the repository ports:
- memory: process-local dictionaries (development and tests).
- sql: SQLAlchemy async engine (SQLite via aiosqlite by default).
"""

from .database import Database
from .memory_repo import InMemoryOrderRepository, InMemoryProductRepository, InMemoryUserRepository
from .sql_repo import SqlOrderRepository, SqlProductRepository, SqlUserRepository

__all__ = [
    "Database",
    "InMemoryOrderRepository",
    "InMemoryProductRepository",
    "InMemoryUserRepository",
    "SqlOrderRepository",
    "SqlProductRepository",
    "SqlUserRepository",
]
