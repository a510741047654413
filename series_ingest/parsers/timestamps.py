"""
Timestamp interpretation for series files.

Exports from different instruments disagree on how to write a point in
time, so a raw timestamp field is tried against ordered format families
and the first match wins:

1. date-time formats (e.g. ``2021-01-05 10:00:00``, ``05/01/2021 10:00``,
   ``2021-01-05T10:00:00+01:00``);
2. time-only formats (e.g. ``10:00``), placed on 1970-01-01 as a
   placeholder date for time-of-day data;
3. date-only formats (e.g. ``Tue 05 Jan 2021``) at midnight; a weekday name
   must agree with the date;
4. the same date-only formats with the current year appended, for
   exports that leave the year out (``Tue 05 Jan``).

Order matters because several patterns are prefixes of others. Naive
values are read as UTC; zoned values are converted to UTC. The result is
an integer count of milliseconds since the epoch and can never be
negative: anything before 1970 is rejected.

Step 4 makes results depend on the calendar year the file is parsed in.
Pass ``year`` explicitly to pin it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from series_ingest.config import ParserConfig
from series_ingest.exceptions import EmptyFieldError, TimestampUnparseableError

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def _to_millis(moment: datetime, candidate: str) -> int:
    """Convert *moment* to epoch milliseconds, treating naive values as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    millis = (moment - EPOCH) // _ONE_MS
    if millis < 0:
        raise TimestampUnparseableError(candidate, "timestamp before 1970")
    return millis


def _weekday_matches(text: str, fmt: str, moment: datetime) -> bool:
    """Check that any weekday name in *text* agrees with the parsed date.

    ``strptime`` reads ``%a``/``%A`` but never checks them against the day,
    so ``Fri 05 Jan 2021`` would otherwise pass for a Tuesday.
    """
    for fmt_token, text_token in zip(fmt.split(), text.split()):
        for directive in ("%a", "%A"):
            if directive not in fmt_token or fmt_token.count("%") != 1:
                continue
            expected = fmt_token.replace(directive, moment.strftime(directive))
            if expected.lower() != text_token.lower():
                return False
    return True


def _try_formats(text: str, formats: list[str]) -> datetime | None:
    """Return the first successful ``strptime`` of *text*, or ``None``."""
    for fmt in formats:
        try:
            moment = datetime.strptime(text, fmt)
        except ValueError:
            continue
        if _weekday_matches(text, fmt, moment):
            return moment
    return None


def interpret_timestamp(
    raw: str,
    config: ParserConfig | None = None,
    *,
    year: int | None = None,
) -> int:
    """Parse a raw timestamp field into milliseconds since the Unix epoch.

    Args:
        raw: The field text, with tokenizer quote stripping already applied.
        config: Parser settings holding the format families. Defaults apply
            when ``None``.
        year: Year appended to date-only stamps that lack one. Defaults to
            the current system year.

    Returns:
        Milliseconds since 1970-01-01T00:00:00Z.

    Raises:
        EmptyFieldError: If the field is empty after trimming.
        TimestampUnparseableError: If no format matches, or the stamp
            falls before 1970.
    """
    if config is None:
        config = ParserConfig()

    text = raw.strip()
    if not text:
        raise EmptyFieldError("empty timestamp")

    moment = _try_formats(text, config.datetime_formats)
    if moment is not None:
        return _to_millis(moment, text)

    moment = _try_formats(text, config.time_formats)
    if moment is not None:
        # strptime fills in 1900-01-01 for time-only patterns
        return _to_millis(moment.replace(year=1970, month=1, day=1), text)

    moment = _try_formats(text, config.date_formats)
    if moment is not None:
        return _to_millis(moment, text)

    if config.infer_missing_year:
        if year is None:
            year = datetime.now().year
        moment = _try_formats(f"{text} {year}", config.date_formats)
        if moment is not None:
            logger.debug("Inferred year %d for timestamp '%s'", year, text)
            return _to_millis(moment, text)

    raise TimestampUnparseableError(text)
