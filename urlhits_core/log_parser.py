"""Hit log parsing: raw lines -> entries -> UTC day-keys."""
from __future__ import annotations
import math
import pathlib
import re
from datetime import datetime, timedelta, timezone
from typing import Iterator, NamedTuple
from .config import DEFAULT_DELIMITER, DAY_KEY_SUFFIX, INVALID_DAY_KEY, MAX_EPOCH_MS
from .exceptions import LogReadError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

PREFIXED_INT_RE = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")

# str.strip() leaves U+FEFF alone
FIELD_SPACE_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+\Z")


class Entry(NamedTuple):
    """Raw fields of one log line, before any interpretation."""
    seconds: str
    url: str


def parse_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> Entry:
    """Split a line on the first delimiter into (seconds, url).

    Anything after the first delimiter belongs to the URL, further
    delimiters included. A line without a delimiter yields an empty URL.
    """
    line = line.rstrip('\r\n')
    seconds, _, url = line.partition(delimiter)
    return Entry(seconds, url)


def coerce_seconds(raw: str) -> float:
    """Best-effort numeric reading of a timestamp field.

    Blank means 0; anything unreadable becomes NaN rather than an error.
    A byte-order mark counts as whitespace, and unsigned 0x/0o/0b
    literals are read as integers.
    """
    raw = FIELD_SPACE_RE.sub("", raw)
    if not raw:
        return 0.0
    if '_' in raw:
        return math.nan
    if PREFIXED_INT_RE.match(raw):
        try:
            return float(int(raw, 0))
        except OverflowError:
            return math.inf
    try:
        return float(raw)
    except ValueError:
        return math.nan


def format_day_key(year: int, month: int, day: int) -> str:
    """Build a `MM/DD/YYYY GMT` day-key."""
    return f"{month:02d}/{day:02d}/{year} {DAY_KEY_SUFFIX}"


def day_key_for(seconds: float) -> str:
    """Map epoch seconds to the day-key of their UTC calendar date."""
    millis = seconds * 1000
    if not math.isfinite(millis) or abs(millis) > MAX_EPOCH_MS:
        return INVALID_DAY_KEY

    # Sub-millisecond precision is dropped toward zero
    try:
        moment = EPOCH + timedelta(milliseconds=math.trunc(millis))
    except OverflowError:
        # Outside datetime's year 1..9999 range
        return INVALID_DAY_KEY

    return format_day_key(moment.year, moment.month, moment.day)


def read_log_lines(file_path: pathlib.Path, encoding: str = 'utf-8', errors: str = 'replace') -> Iterator[str]:
    """Lazily yield the lines of a log file without their terminators.

    Undecodable bytes become U+FFFD by default, so bad content only touches
    its own line; pass errors='strict' to fail instead.
    """
    if not file_path.exists():
        raise LogReadError(f"Log file not found: {file_path}")

    try:
        with file_path.open('r', encoding=encoding, errors=errors) as f:
            for raw_line in f:
                yield raw_line.rstrip('\n')
    except (OSError, UnicodeDecodeError) as e:
        raise LogReadError(f"Failed to read log file {file_path}: {e}") from e
