"""Price normalization and display formatting."""

import logging
import math
import re

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.]")


class InvalidPriceError(ValueError):
    """Raised when a price cannot be turned into a non-negative number."""


def normalize_price(value: object, *, strict: bool = False) -> float:
    """Return a canonical float price from a number or a currency string.

    Strings lose every character that is not a digit or a decimal point before
    parsing, so ``"₹1,234.50"`` becomes ``1234.5``. Malformed input returns
    ``0.0`` unless ``strict`` is set, in which case ``InvalidPriceError`` is
    raised.
    """
    try:
        return _parse_price(value)
    except InvalidPriceError:
        if strict:
            raise
        logger.warning("Malformed price %r, falling back to 0", value)
        return 0.0


def _parse_price(value: object) -> float:
    if isinstance(value, bool):
        raise InvalidPriceError(f"Unsupported price type: {type(value).__name__}")
    if isinstance(value, int | float):
        number = float(value)
        if not math.isfinite(number) or number < 0:
            raise InvalidPriceError(f"Price must be a non-negative number: {value!r}")
        return value
    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        if not cleaned:
            raise InvalidPriceError(f"Price has no digits: {value!r}")
        try:
            number = float(cleaned)
        except ValueError as exc:
            raise InvalidPriceError(f"Unparsable price: {value!r}") from exc
        if not math.isfinite(number):
            raise InvalidPriceError(f"Price is out of range: {value!r}")
        return number
    raise InvalidPriceError(f"Unsupported price type: {type(value).__name__}")


def format_price(amount: float, currency_symbol: str = "₹") -> str:
    """Format an amount for display with two decimals."""
    return f"{currency_symbol}{amount:.2f}"
