# ecommerce/__init__.py
"""
E-commerce backend.

Customer accounts with JWT sign-in, a product catalog and orders, laid out
as Ports & Adapters around a small domain core.
"""

__version__ = "1.0.0"
