import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

log = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


class InvalidAmount(ValueError):
    pass


def parse_amount(value):
    """Decimal currency value rounded to cents; rejects non-numeric and negative input."""
    if value is None or isinstance(value, bool):
        raise InvalidAmount(f"not an amount: {value!r}")
    if isinstance(value, str):
        value = value.strip().replace(",", "").lstrip("$")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"not an amount: {value!r}") from None
    if not amount.is_finite():
        raise InvalidAmount(f"not an amount: {value!r}")
    if amount < 0:
        raise InvalidAmount(f"negative amount: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value):
    return int(parse_amount(value) * 100)


def from_cents(cents):
    return (Decimal(cents) / 100).quantize(CENT)


def sum_amounts(records, amount_of, label="record"):
    """Sum amounts in integer cents, skipping (and logging) malformed rows."""
    total = 0
    for record in records:
        try:
            total += to_cents(amount_of(record))
        except InvalidAmount as e:
            log.warning("Skipping %s with bad amount: %s", label, e)
    return from_cents(total)


def percent(numerator, denominator, places=2):
    """numerator / denominator * 100, rounded; 0 when the denominator is 0."""
    numerator = Decimal(str(numerator))
    denominator = Decimal(str(denominator))
    if denominator == 0:
        return 0.0
    quantum = Decimal(1).scaleb(-places)
    return float((numerator * 100 / denominator).quantize(quantum, rounding=ROUND_HALF_UP))


def as_float(amount):
    return float(amount) if amount is not None else None
