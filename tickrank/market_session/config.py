"""
Market Session Configuration

Exchange session hours used by the market calendar.
"""

from dataclasses import dataclass


@dataclass
class MarketHoursConfig:
    """Exchange session hours (local exchange time)"""

    open_hour: int = 9
    open_minute: int = 15
    close_hour: int = 15
    close_minute: int = 30
    timezone: str = "Asia/Kolkata"

    def __post_init__(self):
        """Validate session bounds"""
        for name, hour, minute in (
            ("open", self.open_hour, self.open_minute),
            ("close", self.close_hour, self.close_minute),
        ):
            if not (0 <= hour <= 23 and 0 <= minute <= 59):
                raise ValueError(f"Invalid {name} time {hour:02d}:{minute:02d}")
        if self.open_minutes >= self.close_minutes:
            raise ValueError(
                f"Market open {self.open_hour:02d}:{self.open_minute:02d} must be "
                f"before close {self.close_hour:02d}:{self.close_minute:02d}"
            )

    @property
    def open_minutes(self) -> int:
        """Session open as minutes since midnight"""
        return self.open_hour * 60 + self.open_minute

    @property
    def close_minutes(self) -> int:
        """Session close as minutes since midnight"""
        return self.close_hour * 60 + self.close_minute
