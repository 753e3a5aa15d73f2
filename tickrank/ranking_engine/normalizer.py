"""
Tick Normalizer

Parses raw, possibly malformed feed records into NormalizedTick.

Philosophy:
    - Coerce, never raise
    - Missing or garbage numerics become 0
    - Missing venue becomes the default exchange
    - Unknown sector becomes the sentinel
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Union

from tickrank.ranking_engine.config import NormalizerConfig
from tickrank.ranking_engine.schemas import NormalizedTick, RawTick
from tickrank.ranking_engine.sectors import SectorLookup, get_sector

LOG = logging.getLogger(__name__)

# Leading numeric prefix, same acceptance as a lenient float parse ("12.5abc" -> 12.5)
_NUMERIC_PREFIX = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')

TickInput = Union[RawTick, Mapping[str, Any]]


def coerce_float(value: Any) -> float:
    """Coerce an untrusted feed value to a finite float, 0.0 on failure."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        candidate = value
    else:
        match = _NUMERIC_PREFIX.match(str(value))
        if not match:
            return 0.0
        candidate = match.group(0)
    try:
        result = float(candidate)
    except (OverflowError, ValueError):
        return 0.0
    if not math.isfinite(result):
        return 0.0
    return result


def calculate_intraday_change(raw: TickInput) -> float:
    """
    Percent change from the day's open.

    Uses (ltp - open) / open * 100 when both prices are positive, otherwise
    falls back to the feed's own change hint, otherwise 0.
    """
    if not isinstance(raw, RawTick):
        raw = RawTick.from_dict(raw)

    ltp = coerce_float(raw.last)
    open_price = coerce_float(raw.open)

    if open_price > 0 and ltp > 0:
        return (ltp - open_price) / open_price * 100
    return coerce_float(raw.percent_change_hint)


class TickNormalizer:
    """
    Stateless raw tick parser.

    Sector is resolved through an injected `lookup_sector(symbol)` callable.
    """

    def __init__(
        self,
        config: Optional[NormalizerConfig] = None,
        lookup_sector: Optional[SectorLookup] = None
    ):
        self.config = config or NormalizerConfig()
        self.lookup_sector = lookup_sector or get_sector

    def normalize(self, raw: TickInput) -> NormalizedTick:
        """
        Normalize a single tick.

        Args:
            raw: RawTick or feed mapping

        Returns:
            NormalizedTick (always, never raises)
        """
        if not isinstance(raw, RawTick):
            raw = RawTick.from_dict(raw if isinstance(raw, Mapping) else {})

        symbol = "" if raw.symbol is None else str(raw.symbol)

        return NormalizedTick(
            symbol=symbol,
            exchange=self._resolve_exchange(raw.exchange),
            ltp=coerce_float(raw.last),
            open_price=coerce_float(raw.open),
            volume=coerce_float(raw.volume),
            percent_change=calculate_intraday_change(raw),
            sector=self._resolve_sector(symbol),
        )

    def normalize_batch(self, raws: Optional[Iterable[TickInput]]) -> List[NormalizedTick]:
        """Normalize a batch, preserving feed order"""
        return [self.normalize(raw) for raw in (raws or [])]

    def _resolve_exchange(self, exchange: Any) -> str:
        if exchange is None:
            return self.config.default_exchange
        exchange = str(exchange).strip()
        return exchange or self.config.default_exchange

    def _resolve_sector(self, symbol: str) -> str:
        try:
            sector = self.lookup_sector(symbol)
        except Exception as e:
            LOG.warning(f"Sector lookup failed for {symbol}: {e}")
            return self.config.unknown_sector
        return sector or self.config.unknown_sector
