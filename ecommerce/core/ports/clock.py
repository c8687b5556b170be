# ecommerce/core/ports/clock.py
from datetime import datetime
from typing import Protocol

class IClock(Protocol):
    """Source of the current time (always timezone-aware UTC)."""

    def now(self) -> datetime:
        ...
