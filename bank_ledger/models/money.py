"""Fixed-point money helpers.

Balances and amounts are ``Decimal`` values quantized to cents so that
repeated deposits and withdrawals never drift the way binary floats do.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Decimal | int | str) -> Decimal:
    """Convert ``value`` to a cent-quantized Decimal.

    Parameters
    ----------
    value : Decimal | int | str
        Amount to convert. Floats are rejected; pass ``str(x)`` instead.

    Returns
    -------
    Decimal
        Quantized amount.

    Raises
    ------
    ValueError
        If ``value`` is not a finite number or is too large to hold in cents.
    """
    if isinstance(value, float):
        raise ValueError("Pass money as Decimal, int or str, not float")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Not a number: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount out of range: {value!r}") from None


def format_money(amount: Decimal) -> str:
    """Render an amount as ``$1,234.50``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
