"""
Fixed-Point Amount Module

Converts decimal amount strings to integer subunits and back. Balances are
held as integers scaled by 10,000 so ledger arithmetic is exact. NEVER uses
float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext

# Subunits per display unit (four fractional digits)
PRECISION = 4
SCALE = 10 ** PRECISION

_QUANTUM = Decimal(1).scaleb(-PRECISION)


class AmountError(ValueError):
    """Raised when an amount string cannot be converted to subunits"""


class NegativeAmountError(AmountError):
    """Raised for a well-formed amount below zero"""


def parse_amount(text: str) -> int:
    """
    Convert a decimal string into an integer count of subunits

    Digits past the fourth fractional place are truncated toward zero,
    however many significant digits the input carries.

    Args:
        text: Decimal string such as "1.5" or "10.0000"; empty maps to zero

    Returns:
        Non-negative subunit count

    Raises:
        NegativeAmountError: If the text is a valid decimal below zero
        AmountError: If the text is not a finite decimal
    """
    if text is None:
        return 0
    stripped = text.strip()
    if not stripped:
        return 0

    try:
        value = Decimal(stripped)
    except InvalidOperation:
        raise AmountError(f"Cannot convert '{text}' to an amount")

    if not value.is_finite():
        raise AmountError(f"Amount must be finite, got '{text}'")
    if value < 0:
        raise NegativeAmountError(f"Amount must not be negative, got '{text}'")

    # Scaling must be exact so that only ROUND_DOWN decides the last subunit
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + PRECISION + 1)
        try:
            scaled = value * SCALE
        except ArithmeticError:
            raise AmountError(f"Amount out of range, got '{text}'")
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def to_decimal(subunits: int) -> Decimal:
    """Convert subunits back to a Decimal in display units"""
    return (Decimal(subunits) / SCALE).quantize(_QUANTUM)


def format_amount(subunits: int) -> str:
    """Format subunits for output, e.g. 50000 -> '5.0000'"""
    return f"{to_decimal(subunits):.{PRECISION}f}"
