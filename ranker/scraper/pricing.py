"""Price text parsing."""

from __future__ import annotations

import re
from decimal import Decimal

from ranker.scraper.errors import ParseError

# "Â£" is how a pound sign reads when UTF-8 bytes are decoded as Latin-1.
_CURRENCY_SYMBOLS = ("Â£", "£")
_SAVE_PREFIX = "Save "
_LEADING_NUMBER = re.compile(r"\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))")


def parse_price(text: str) -> Decimal:
    """Return the amount in a price string such as ``"£19.99"``.

    The ``"Save "`` prefix and the pound sign are removed, then the leading
    number is read.  Anything after the number is ignored, so
    ``"Save £5.86 on the monthly price"`` gives ``Decimal("5.86")``.

    Raises:
        ParseError: If no number starts the remaining text.
    """
    cleaned = text.replace(_SAVE_PREFIX, "")
    for symbol in _CURRENCY_SYMBOLS:
        cleaned = cleaned.replace(symbol, "")

    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        raise ParseError(text)
    return Decimal(match.group(1))
