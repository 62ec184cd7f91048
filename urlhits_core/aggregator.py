"""Per-day URL hit aggregation.

The Index is a two-level mapping: day-key -> {url: hits}. Both levels are
plain dicts, so URLs keep the order in which they were first seen on a day;
the reporter relies on that order to break ties.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable
from .config import DEFAULT_DELIMITER, INVALID_DAY_KEY
from .log_parser import Entry, coerce_seconds, day_key_for, parse_line

logger = logging.getLogger(__name__)

DayBucket = Dict[str, int]
HitIndex = Dict[str, DayBucket]


class HitAggregator:
    """Count hits per URL per UTC day, one log line at a time."""

    def __init__(self, delimiter: str = DEFAULT_DELIMITER, skip_blank_lines: bool = False):
        self.delimiter = delimiter
        self.skip_blank_lines = skip_blank_lines
        self.index: HitIndex = {}
        self.lines_processed = 0
        self.invalid_timestamps = 0

    def process(self, line: str) -> None:
        """Parse one raw line and count it. Never raises on bad content."""
        if self.skip_blank_lines and not line.strip():
            return
        self.lines_processed += 1
        self.record(parse_line(line, self.delimiter))

    def record(self, entry: Entry) -> None:
        """Count an already split entry under its day-key."""
        day_key = day_key_for(coerce_seconds(entry.seconds))
        if day_key == INVALID_DAY_KEY:
            self.invalid_timestamps += 1
            logger.debug("Unusable timestamp %r for url %r", entry.seconds, entry.url)

        bucket = self.index.setdefault(day_key, {})
        bucket[entry.url] = bucket.get(entry.url, 0) + 1

    def process_lines(self, lines: Iterable[str]) -> HitIndex:
        """Consume every line from the source and return the finished Index."""
        for line in lines:
            self.process(line)

        logger.info(
            "Aggregated %d lines into %d days (%d unusable timestamps)",
            self.lines_processed, len(self.index), self.invalid_timestamps,
        )
        return self.index
