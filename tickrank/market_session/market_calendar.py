"""Exchange session calendar.

Provides the default market-open signal for the ranking pipeline when the
caller does not supply one.

API:
- `get_market_status(now=None, hours=None) -> MarketStatus`
- `is_market_open(now=None, hours=None) -> bool`
- `get_time_until_market(now=None, hours=None) -> (until_open, until_close)`

Session hours come from `MarketHoursConfig` (09:15-15:30 Asia/Kolkata by
default). Both bounds are inclusive at minute resolution. Naive datetimes are
read as exchange-local time. Exchange holidays are not modelled.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from tickrank.market_session.config import MarketHoursConfig

STATUS_WEEKEND = "Weekend"
STATUS_PRE_MARKET = "Pre-Market"
STATUS_OPEN = "Market Open"
STATUS_CLOSED = "Market Closed"

_DEFAULT_HOURS = MarketHoursConfig()


@dataclass(frozen=True)
class MarketStatus:
    is_open: bool
    status: str


def _local_now(now: Optional[datetime], hours: MarketHoursConfig) -> datetime:
    tz = ZoneInfo(hours.timezone)
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def _minutes(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


def get_market_status(
    now: Optional[datetime] = None,
    hours: Optional[MarketHoursConfig] = None
) -> MarketStatus:
    """Return whether the exchange is open at `now` (default: current time)."""
    hours = hours or _DEFAULT_HOURS
    local = _local_now(now, hours)

    # Saturday=5, Sunday=6
    if local.weekday() >= 5:
        return MarketStatus(False, STATUS_WEEKEND)

    minutes = _minutes(local)
    if hours.open_minutes <= minutes <= hours.close_minutes:
        return MarketStatus(True, STATUS_OPEN)
    if minutes < hours.open_minutes:
        return MarketStatus(False, STATUS_PRE_MARKET)
    return MarketStatus(False, STATUS_CLOSED)


def is_market_open(
    now: Optional[datetime] = None,
    hours: Optional[MarketHoursConfig] = None
) -> bool:
    return get_market_status(now, hours).is_open


def get_time_until_market(
    now: Optional[datetime] = None,
    hours: Optional[MarketHoursConfig] = None
) -> Tuple[int, int]:
    """Minutes until today's open and close; negative once passed."""
    hours = hours or _DEFAULT_HOURS
    minutes = _minutes(_local_now(now, hours))
    return hours.open_minutes - minutes, hours.close_minutes - minutes
