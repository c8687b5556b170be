# ecommerce/adapters/security/clock.py
from datetime import datetime, timezone

from ecommerce.core.ports.clock import IClock


class SystemClock(IClock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
