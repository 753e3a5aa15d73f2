"""Default symbol -> sector collaborator.

The engine only ever sees a plain `lookup_sector(symbol) -> str` callable.
This module ships a default one built from a static NSE mapping; callers with
a maintained classification inject their own via `make_sector_lookup`.
"""
from typing import Callable, Mapping, Optional

UNKNOWN_SECTOR = "Unknown"

SectorLookup = Callable[[str], str]

DEFAULT_SECTOR_MAP: dict[str, str] = {
    # Banking
    "HDFCBANK": "Banking", "ICICIBANK": "Banking", "SBIN": "Banking",
    "KOTAKBANK": "Banking", "AXISBANK": "Banking", "INDUSINDBK": "Banking",
    "BANKBARODA": "Banking", "PNB": "Banking",
    # IT
    "TCS": "IT", "INFY": "IT", "WIPRO": "IT", "HCLTECH": "IT",
    "TECHM": "IT", "LTIM": "IT",
    # Financial services
    "BAJFINANCE": "Finance", "BAJAJFINSV": "Finance", "HDFCLIFE": "Finance",
    "SBILIFE": "Finance", "SHRIRAMFIN": "Finance",
    # Energy
    "RELIANCE": "Energy", "ONGC": "Energy", "BPCL": "Energy",
    "NTPC": "Energy", "POWERGRID": "Energy", "COALINDIA": "Energy",
    # Auto
    "MARUTI": "Auto", "TATAMOTORS": "Auto", "M&M": "Auto",
    "BAJAJ-AUTO": "Auto", "EICHERMOT": "Auto", "HEROMOTOCO": "Auto",
    # FMCG
    "HINDUNILVR": "FMCG", "ITC": "FMCG", "NESTLEIND": "FMCG",
    "BRITANNIA": "FMCG", "TATACONSUM": "FMCG",
    # Pharma
    "SUNPHARMA": "Pharma", "DRREDDY": "Pharma", "CIPLA": "Pharma",
    "DIVISLAB": "Pharma", "APOLLOHOSP": "Pharma",
    # Metals
    "TATASTEEL": "Metals", "JSWSTEEL": "Metals", "HINDALCO": "Metals",
    # Infra / cement
    "LT": "Infra", "ULTRACEMCO": "Infra", "GRASIM": "Infra",
    "ADANIPORTS": "Infra", "ADANIENT": "Infra",
    # Telecom
    "BHARTIARTL": "Telecom",
    # Consumer
    "TITAN": "Consumer", "ASIANPAINT": "Consumer", "TRENT": "Consumer",
    # Indices
    "NIFTY": "Index", "BANKNIFTY": "Index", "FINNIFTY": "Index",
}


def make_sector_lookup(
    mapping: Optional[Mapping[str, str]] = None,
    default: str = UNKNOWN_SECTOR,
) -> SectorLookup:
    """Return a lookup closure over `mapping` (defaults to DEFAULT_SECTOR_MAP)."""
    table = dict(DEFAULT_SECTOR_MAP if mapping is None else mapping)

    def lookup_sector(symbol: str) -> str:
        return table.get(symbol, default)

    return lookup_sector


def known_sectors(mapping: Optional[Mapping[str, str]] = None) -> list[str]:
    """Distinct sectors of `mapping` in first-seen order."""
    table = DEFAULT_SECTOR_MAP if mapping is None else mapping
    return list(dict.fromkeys(table.values()))


get_sector = make_sector_lookup()
