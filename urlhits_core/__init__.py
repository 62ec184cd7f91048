"""urlhits core: per-day URL hit counting and reporting."""

from .aggregator import HitAggregator, HitIndex
from .reporter import render, report_lines
from .log_parser import read_log_lines
from .config import load_settings, ReportSettings, DayOrder

__all__ = [
    "HitAggregator",
    "HitIndex",
    "render",
    "report_lines",
    "read_log_lines",
    "load_settings",
    "ReportSettings",
    "DayOrder",
]
