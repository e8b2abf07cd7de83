"""Number formatting for display: currency with B/M/K suffixes, signed percents."""

from config.defaults import CURRENCY_SHORT_SYMBOL, CURRENCY_SYMBOL


def format_currency(value: float, compact: bool = True) -> str:
    """Format an amount, e.g. 32292000 -> '₨32.29M'.

    compact=False gives the full figure with thousands separators.
    """
    if not compact:
        return f"{CURRENCY_SYMBOL} {value:,.0f}"
    sign = "-" if value < 0 else ""
    amount = abs(value)
    if amount >= 1e9:
        return f"{sign}{CURRENCY_SHORT_SYMBOL}{amount / 1e9:.2f}B"
    if amount >= 1e6:
        return f"{sign}{CURRENCY_SHORT_SYMBOL}{amount / 1e6:.2f}M"
    if amount >= 1e3:
        return f"{sign}{CURRENCY_SHORT_SYMBOL}{amount / 1e3:.1f}K"
    return f"{sign}{CURRENCY_SHORT_SYMBOL}{amount:,.0f}"


def format_percent(value: float, signed: bool = True) -> str:
    return f"{value:+.1f}%" if signed else f"{value:.1f}%"


def format_number(value: float) -> str:
    return f"{value:,.0f}"
