"""
Market Session

Exchange session status used as the default market-open signal.
"""

from tickrank.market_session.config import MarketHoursConfig
from tickrank.market_session.market_calendar import (
    MarketStatus,
    get_market_status,
    get_time_until_market,
    is_market_open
)

__all__ = [
    'MarketHoursConfig',
    'MarketStatus',
    'get_market_status',
    'get_time_until_market',
    'is_market_open',
]
