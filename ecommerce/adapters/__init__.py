# ecommerce/adapters/__init__.py
"""
Infrastructure Adapters.

Concrete implementations of the Ports defined in `ecommerce.core.ports`:
- `api`: The Primary Adapter (Driving) - FastAPI web server.
- `persistence`: Secondary Adapter (Driven) - in-memory and SQL stores.
- `security`: Secondary Adapter (Driven) - JWT issuer, bcrypt hasher, clock.

Dependencies point INWARD. These modules depend on `ecommerce.core`,
but `ecommerce.core` never imports from here.
"""
