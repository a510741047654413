"""
Line tokenizer for delimiter-separated series files.

Fields are delimited by a single separator character. One optional layer
of quoting is recognized: a field that starts with the quote character
has that quote skipped, and a quote sitting directly before the next
separator (or the end of the line) is dropped as well. Nothing else is
unescaped, so quoted content cannot contain the separator.

The cursor protocol lets callers walk a line without building a list:

    cursor = 0
    text, cursor = next_field(line, cursor)   # cursor now past the separator

A field that runs to the end of the line returns ``len(line) + 1``, so a
trailing separator still produces one final empty field.
"""

from __future__ import annotations

from typing import Iterator

from series_ingest.exceptions import EmptyFieldError

SEPARATOR = ","
QUOTE = '"'


def strip_quotes(text: str, quote: str = QUOTE) -> str:
    """Remove one wrapping layer of *quote* from *text*, if present."""
    if text.startswith(quote):
        text = text[1:]
        if text.endswith(quote):
            text = text[:-1]
    return text


def next_field(
    line: str,
    cursor: int = 0,
    separator: str = SEPARATOR,
    quote: str = QUOTE,
) -> tuple[str, int]:
    """Return the field starting at *cursor* and the cursor after its separator.

    A cursor equal to ``len(line)`` sits just after a trailing separator and
    reads the empty final field, returning ``("", len(line) + 1)``. Callers
    that need a value reject that empty text themselves.

    Raises:
        EmptyFieldError: If *cursor* is beyond ``len(line)``, i.e. the line
            has no more data.
    """
    if cursor > len(line):
        raise EmptyFieldError("no more data")

    end = line.find(separator, cursor)
    next_cursor = end + 1
    if end < 0:
        end = len(line)
        next_cursor = len(line) + 1

    return strip_quotes(line[cursor:end], quote), next_cursor


def iter_fields(
    line: str,
    start: int = 0,
    separator: str = SEPARATOR,
    quote: str = QUOTE,
) -> Iterator[str]:
    """Lazily yield every field of *line* from *start* onwards."""
    cursor = start
    while cursor <= len(line):
        text, cursor = next_field(line, cursor, separator, quote)
        yield text
