import math
import re
from decimal import Decimal

ERROR_MARKER = "Error"

# decimal places kept when rounding results (hides 0.1 + 0.2 style tails)
ROUND_DIGITS = 10

# integral values below this are written out in full
_PLAIN_INT_LIMIT = 1e21

# non-integers at or above this magnitude are written as plain decimals
_PLAIN_FRACTION_LIMIT = 1e-6

_EXPONENT_ZEROS = re.compile(r"e([+-])0+(\d)")


def format_number(n: float) -> str:
    """
    Turn a numeric value into the exact text the display shows.

    - non-finite -> ERROR_MARKER
    - rounded to ROUND_DIGITS decimals, -0 becomes 0
    - integers have no decimal point, decimals lose trailing zeros
    - magnitudes of 1e21 and up, or below 1e-6, use exponent notation
      ("1e+21", "1.5e-7")
    """
    if not math.isfinite(n):
        return ERROR_MARKER

    rounded = round(float(n), ROUND_DIGITS)
    if rounded == 0:
        rounded = 0.0

    if rounded.is_integer() and abs(rounded) < _PLAIN_INT_LIMIT:
        # shortest digits, zero padded: 2**60 -> 1152921504606847000
        return str(int(Decimal(repr(rounded))))

    text = repr(rounded)
    if "e" in text and _PLAIN_FRACTION_LIMIT <= abs(rounded) < 1:
        # repr goes exponential below 1e-4; rounded has at most ROUND_DIGITS decimals
        text = f"{rounded:.{ROUND_DIGITS}f}"

    if "e" in text:
        return _EXPONENT_ZEROS.sub(r"e\1\2", text)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_display(text: str) -> float:
    """Numeric value of the display text. Partial or unreadable entries count as 0."""
    if text in ("-", "", "."):
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if math.isnan(value):
        return 0.0
    return value
