"""Amount validation and fixed-point (mantissa) scaling."""

from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation
from typing import Union

Amount = Union[int, float, str, Decimal]


def error_prefix(operation: str) -> str:
    return f"Compound [{operation}] | "


def _shift(value: Decimal, places: int) -> Decimal:
    """``value * 10**places`` without rounding the coefficient."""
    # The default context keeps 28 significant digits
    exact = Context(prec=len(value.as_tuple().digits) + 1)
    return value.scaleb(places, context=exact)


def parse_amount(amount: Amount, prefix: str = "") -> Decimal:
    """Validate *amount* and convert it to an exact ``Decimal``.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather
    than its binary expansion.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float, str, Decimal)):
        raise TypeError(prefix + "Argument `amount` must be a string, number, or Decimal.")

    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation:
            raise ValueError(prefix + f"Argument `amount` is not a number: {amount!r}.") from None

    if not value.is_finite():
        raise ValueError(prefix + "Argument `amount` must be finite.")
    if value < 0:
        raise ValueError(prefix + "Argument `amount` must not be negative.")
    return value


def to_mantissa(
    amount: Amount,
    decimals: int,
    mantissa: bool = False,
    prefix: str = "",
) -> int:
    """Scale *amount* to an integer number of base units.

    Args:
        amount: Amount in natural units (``1.5`` ETH), or already in base
            units when ``mantissa`` is True.
        decimals: Decimal precision of the asset.
        mantissa: Whether *amount* is already scaled.
        prefix: Error message prefix naming the operation.

    Returns:
        ``amount * 10**decimals`` as an int (or ``amount`` itself when
        ``mantissa`` is True).
    """
    value = parse_amount(amount, prefix)
    if not mantissa:
        value = _shift(value, decimals)

    if value != value.to_integral_value():
        if mantissa:
            raise ValueError(prefix + "Argument `amount` must be a whole number of base units.")
        raise ValueError(
            prefix + f"Argument `amount` has more than {decimals} decimal places."
        )
    return int(value)


def from_mantissa(raw: int | str, decimals: int) -> Decimal:
    """Inverse of ``to_mantissa``: base units back to natural units."""
    return _shift(Decimal(int(raw)), -decimals)
