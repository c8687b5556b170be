# ecommerce/adapters/api/__init__.py
"""
REST API Adapter.

HTTP entry point built on FastAPI. Routers translate requests into use case
calls and domain errors into status codes; no business logic lives here.
The application factory is `ecommerce.main.create_app`.
"""
