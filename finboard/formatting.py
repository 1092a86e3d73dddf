import logging
import math
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)

FALLBACK = "$0"


def format_currency(value, decimals: int = 2, symbol: str = "$") -> str:
    """``-1234.5`` -> ``-$1,234.50``; anything unformattable becomes ``$0``."""
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        logger.debug("cannot format %r as currency", value)
        return FALLBACK
    if not number.is_finite():
        return FALLBACK
    sign = "-" if number < 0 else ""
    return f"{sign}{symbol}{abs(number):,.{decimals}f}"


def format_percent(ratio: float, decimals: int = 0) -> str:
    if ratio is None or not math.isfinite(ratio):
        return "0%"
    return f"{ratio * 100:.{decimals}f}%"
