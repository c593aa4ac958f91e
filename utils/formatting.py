"""
Formatting utilities (German number conventions).
"""


def format_number(value: float, decimals: int = None) -> str:
    """
    Format a number with "." thousands grouping and "," decimals.

    Args:
        value: The number.
        decimals: Decimal places (default: 0 for whole numbers, else 1).

    Returns:
        Formatted string, e.g. "22.000" or "85,5".
    """
    if decimals is None:
        decimals = 0 if float(value).is_integer() else 1
    text = f"{value:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(amount: float, currency: str = "EUR") -> str:
    """
    Format an amount in whole units as currency.

    Args:
        amount: The amount in whole units (e.g., euros, not cents).
        currency: Currency code (default EUR).

    Returns:
        Formatted currency string, e.g. "1.500.000 €".
    """
    symbols = {
        "EUR": "€",
        "USD": "$",
        "GBP": "£",
        "CHF": "CHF",
    }
    symbol = symbols.get(currency, currency)
    return f"{format_number(round(amount), 0)} {symbol}"


def format_percent(value: float, decimals: int = 1) -> str:
    """
    Format a number as a percentage.

    Args:
        value: The percentage value.
        decimals: Number of decimal places.

    Returns:
        Formatted percentage string, e.g. "7,5%".
    """
    return f"{format_number(value, decimals)}%"
