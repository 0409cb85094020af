import html
import logging
import math
import threading
import time as clock
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import Request

from config import BUSINESS_TIMEZONE, RATE_LIMIT_SWEEP_INTERVAL, RATE_LIMIT_WINDOW_SECONDS, RATE_LIMITS
from errors import RateLimited

logger = logging.getLogger(__name__)


def business_today() -> date:
    """Current civil date at the trading locations."""
    return datetime.now(ZoneInfo(BUSINESS_TIMEZONE)).date()


def sanitize_html(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return html.escape(value, quote=True)


def format_time_12h(value: time) -> str:
    """
    Renders a stored wall-clock time as "6:00 PM".

    The value is a civil time at the pitch, so no time zone conversion happens.
    """
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_time_range(start: time, end: time) -> str:
    return f"{format_time_12h(start)} - {format_time_12h(end)}"


def format_display_date(value: date) -> str:
    return f"{value:%A} {value.day} {value:%B %Y}"


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client:
        return request.client.host
    return "unknown"


class RateLimiter:
    """
    Fixed window counter per key.

    State lives in process memory, so every worker counts on its own.
    Expired windows are dropped every ``sweep_interval`` hits.
    """

    def __init__(self, window_seconds: int = RATE_LIMIT_WINDOW_SECONDS, sweep_interval: int = RATE_LIMIT_SWEEP_INTERVAL):
        self.window_seconds = window_seconds
        self.sweep_interval = sweep_interval
        self._windows: dict[str, tuple[int, float]] = {}
        self._hits = 0
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._windows)

    def _sweep(self, now: float):
        expired = [key for key, (_, reset_at) in self._windows.items() if now >= reset_at]
        for key in expired:
            del self._windows[key]
        if expired:
            logger.debug("Dropped %d expired rate limit windows", len(expired))

    def hit(self, bucket: str, identity: str, limit: int) -> int:
        """
        Counts one request and returns the remaining quota.

        Raises:
            RateLimited: If the quota of the current window is used up.
        """
        key = f"{bucket}:{identity}"
        now = clock.monotonic()
        with self._lock:
            self._hits += 1
            if self._hits % self.sweep_interval == 0:
                self._sweep(now)
            count, reset_at = self._windows.get(key, (0, now + self.window_seconds))
            if now >= reset_at:
                count, reset_at = 0, now + self.window_seconds
            if count >= limit:
                retry_after = max(1, math.ceil(reset_at - now))
                logger.info("Rate limit hit for %s (retry in %ss)", key, retry_after)
                raise RateLimited(bucket, retry_after)
            count += 1
            self._windows[key] = (count, reset_at)
            return limit - count

    def reset(self):
        with self._lock:
            self._windows.clear()
            self._hits = 0


rate_limiter = RateLimiter()


def check_rate_limit(request: Request, bucket: str) -> int:
    return rate_limiter.hit(bucket, get_client_ip(request), RATE_LIMITS[bucket])


def paginate(query, page: int, limit: int):
    """
    Applies LIMIT/OFFSET to a SQLAlchemy query.

    Returns:
        tuple: The rows of the page and the pagination metadata.
    """
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return rows, {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit),
    }
