"""Amount parsing utilities."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import re

from flowtrack.domain.errors import InvalidAmountError, invalid_amount

CENT = Decimal("0.01")


def parse_amount(amount: str | int | Decimal) -> Decimal:
    """Parse an amount into a Decimal.

    Strings may carry a currency symbol and thousands separators:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "-50" (sign is kept, see parse_magnitude for non-negative amounts)

    The result is rounded half up to whole cents, the precision amounts and
    balances are stored with.

    Args:
        amount: Amount string, int or Decimal

    Returns:
        Decimal amount

    Raises:
        InvalidAmountError: If the amount cannot be parsed or is not finite
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(invalid_amount(amount))

    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, int):
        value = Decimal(amount)
    elif isinstance(amount, str):
        cleaned = amount.strip()
        if not cleaned:
            raise InvalidAmountError("Empty amount string")
        cleaned = re.sub(r"[$€£¥]", "", cleaned).replace(",", "").strip()
        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            raise InvalidAmountError(invalid_amount(amount))
    else:
        raise InvalidAmountError(invalid_amount(amount))

    if not value.is_finite():
        raise InvalidAmountError(invalid_amount(amount))
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmountError(invalid_amount(amount))


def parse_magnitude(amount: str | int | Decimal) -> Decimal:
    """Parse a transaction or budget amount, which must not be negative.

    Raises:
        InvalidAmountError: If the amount is unparsable or negative
    """
    value = parse_amount(amount)
    if value < 0:
        raise InvalidAmountError(f"Amount must not be negative, got {value}")
    return value
