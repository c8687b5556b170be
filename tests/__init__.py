# tests/__init__.py
"""
Test Suite for the e-commerce backend.

Organization:
- `core`: Domain models and use cases, against in-memory stores or mocked ports.
- `adapters`: Security adapters, both repository backends and the HTTP API.
"""
