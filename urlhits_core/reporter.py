"""Plain-text hit report: one block per day, URLs by descending hits."""
from __future__ import annotations
import re
import sys
from typing import Iterator, List, Optional, TextIO, Tuple
from .aggregator import DayBucket, HitIndex
from .config import DayOrder

DAY_KEY_RE = re.compile(r'^(\d{2})/(\d{2})/(\d+) ')


def _calendar_sort_key(day_key: str) -> Tuple[int, int, int, int, str]:
    m = DAY_KEY_RE.match(day_key)
    if not m:
        # Invalid-date keys go after every real day
        return (1, 0, 0, 0, day_key)
    month, day, year = (int(g) for g in m.groups())
    return (0, year, month, day, day_key)


def sort_day_keys(index: HitIndex, order: DayOrder = DayOrder.LEXICOGRAPHIC) -> List[str]:
    """Return day-keys in report order.

    LEXICOGRAPHIC compares the literal key strings, so `01/05/2024 GMT`
    comes before `02/01/2023 GMT`. CHRONOLOGICAL is opt-in and orders by
    the calendar date the key names.
    """
    if order is DayOrder.CHRONOLOGICAL:
        return sorted(index, key=_calendar_sort_key)
    return sorted(index)


def ranked_urls(bucket: DayBucket) -> List[Tuple[str, int]]:
    """URL/count pairs by descending count; equal counts keep first-seen order."""
    return sorted(bucket.items(), key=lambda pair: pair[1], reverse=True)


def report_lines(index: HitIndex, order: DayOrder = DayOrder.LEXICOGRAPHIC) -> Iterator[str]:
    for day_key in sort_day_keys(index, order):
        yield day_key
        for url, count in ranked_urls(index[day_key]):
            yield f"{url} {count}"


def render(index: HitIndex, out: Optional[TextIO] = None, order: DayOrder = DayOrder.LEXICOGRAPHIC) -> None:
    """Write the report for a finished Index. An empty Index writes nothing."""
    out = out if out is not None else sys.stdout
    for line in report_lines(index, order):
        out.write(line + "\n")
