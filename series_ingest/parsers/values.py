"""
Value interpretation for series files.

Instrument exports write numbers in a few inconsistent ways. A raw value
field is normalized by:

1. Stripping one optional layer of quoting.
2. Cutting the text at a comma found after the first character. A decimal
   comma (``3,5``) therefore keeps only its integer part; the fraction is
   dropped, not converted.
3. Trimming whitespace.
4. Parsing a standard floating-point literal and rounding it to float32.
"""

from __future__ import annotations

import numpy as np

from series_ingest.exceptions import EmptyFieldError, ValueUnparseableError
from series_ingest.parsers.tokenizer import QUOTE, strip_quotes


def interpret_value(raw: str, quote: str = QUOTE, *, unquote: bool = True) -> float:
    """Parse a raw value field into a float32-precision number.

    Pass ``unquote=False`` for text that already came through the
    tokenizer, so a field carries at most one stripped quote layer.

    Raises:
        EmptyFieldError: If nothing remains after normalization.
        ValueUnparseableError: If the remainder is not a float literal.
    """
    if not raw:
        raise EmptyFieldError("empty value")

    text = strip_quotes(raw, quote) if unquote else raw
    comma = text.find(",")
    if comma > 0:
        text = text[:comma]
    text = text.strip()

    if not text:
        raise EmptyFieldError("empty value")
    # float() also accepts digit-group underscores, which no export writes
    if "_" in text:
        raise ValueUnparseableError(text)

    try:
        number = float(text)
    except ValueError:
        raise ValueUnparseableError(text) from None

    with np.errstate(over="ignore"):
        return float(np.float32(number))
