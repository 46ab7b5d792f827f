from salary_tracker.app.naming_conventions import CURRENCY


def format_currency(amount: float | int, currency: str = CURRENCY) -> str:
    """
    Format an amount for display with thousands separators, two decimals and the currency code.

    Example
    -------
    >>> format_currency(1234.5)
    '1,234.50 MAD'
    >>> format_currency(-200)
    '-200.00 MAD'
    """
    return f"{amount:,.2f} {currency}"
