"""
Money helpers shared by the whole project.

Usage:
    from app.utils.money import to_money, format_money

    to_money("10.005")          -> Decimal("10.01")
    to_money(float("nan"))      -> Decimal("0.00")
    format_money(15000, "ARS")  -> "$ 15.000,00"
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

# Currency symbol prefix; anything else is printed as its ISO code
_CURRENCY_SYMBOL = {
    "ARS": "$",
}


def to_money(value) -> Decimal:
    """
    Coerce a stored or computed amount to a 2-place Decimal.

    Accepts int / float / Decimal / str / None. Anything that is not a finite
    number (None, "", "abc", NaN, Infinity) becomes 0.00.
    """
    if value is None:
        return ZERO
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def currency_label(code: str) -> str:
    """Human-readable currency prefix."""
    return _CURRENCY_SYMBOL.get(code, code)


def format_money(amount, currency: str = "ARS") -> str:
    """
    Format an amount Argentine style: dot thousands separator, comma decimals.

    Args:
        amount: number (int / float / Decimal / str)
        currency: ISO currency code

    Returns:
        "$ 15.000,00" / "USD 1.200,50"
    """
    formatted = "{:,.2f}".format(to_money(amount))
    formatted = formatted.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{currency_label(currency)} {formatted}"
