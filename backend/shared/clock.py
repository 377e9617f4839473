"""
Time source shared by services and repositories.

Services take a ``Clock`` so tests can move time forward deterministically
(rate-limit windows, token expiry) without patching ``datetime``.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
