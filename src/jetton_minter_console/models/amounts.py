"""Conversions between decimal token amounts and nano units."""

from decimal import Decimal, InvalidOperation

from jetton_minter_console.models.base import NanoAmount

DECIMALS = 9
NANO = 10**DECIMALS


def to_nano(amount: str | int | Decimal) -> NanoAmount:
    """Converts a decimal amount (e.g. ``"1.5"``) into nano units.

    Raises:
        ValueError: If the amount is not a number or has more than 9
            fractional digits.
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")

    nano = value * NANO
    if nano != nano.to_integral_value():
        raise ValueError(f"Amount {amount!r} has more than {DECIMALS} decimals")
    return int(nano)


def from_nano(amount: NanoAmount) -> str:
    """Formats nano units as a decimal string without trailing zeros."""
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), NANO)
    if not frac:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{str(frac).rjust(DECIMALS, '0').rstrip('0')}"
