import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

_STRIP_CHARS = re.compile(r"[,\s₹$]")


class AmountParseError(ValueError):
    """Raised when an amount cannot be read as a finite number."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid amount: {value!r}")


def parse_amount(value: Any) -> Decimal:
    """
    Convert a stored or imported amount to Decimal.
    Accepts numbers and numeric strings with thousands separators or a currency symbol.
    """
    if isinstance(value, bool) or value is None:
        raise AmountParseError(value)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    else:
        clean = _STRIP_CHARS.sub("", str(value))
        if not clean:
            raise AmountParseError(value)
        try:
            amount = Decimal(clean)
        except InvalidOperation:
            raise AmountParseError(value) from None
    if not amount.is_finite():
        raise AmountParseError(value)
    return amount


def to_money(amount: Decimal) -> float:
    """Round half-up to paise and return a JSON-friendly float."""
    return float(amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
