import re
from decimal import Decimal, InvalidOperation
from typing import Optional

# Plain ASCII decimals only: no digit-group underscores, no non-ASCII digits.
PRICE_RE = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$")


def parse_price(raw: Optional[str]) -> Optional[Decimal]:
    """Strict decimal parse of a price cell; anything non-finite or malformed is None."""
    if not raw:
        return None
    s = raw.strip()
    if not PRICE_RE.match(s):
        return None
    try:
        value = Decimal(s)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def usable_price(raw: Optional[str]) -> Optional[Decimal]:
    # Zero is treated the same as a parse failure, so a free order never counts.
    value = parse_price(raw)
    if value is None or value == 0:
        return None
    return value
