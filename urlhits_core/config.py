"""Configuration constants and settings loading for urlhits."""
from __future__ import annotations
import codecs
import yaml
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional
from enum import Enum

from .exceptions import ConfigError


# Field separator between the timestamp and the URL
DEFAULT_DELIMITER = '|'

# Literal suffix on every day-key; dates are always taken in UTC
DAY_KEY_SUFFIX = 'GMT'

# Day-key used when a timestamp cannot be turned into a calendar date
INVALID_DAY_KEY = f'NaN/NaN/NaN {DAY_KEY_SUFFIX}'

# Largest absolute epoch offset (ms) a date may have, as in ECMAScript
MAX_EPOCH_MS = 8.64e15


class DayOrder(Enum):
    """Order in which day blocks are written to the report."""
    LEXICOGRAPHIC = "lexicographic"
    CHRONOLOGICAL = "chronological"

    @classmethod
    def all_values(cls) -> list[str]:
        return [order.value for order in cls]


@dataclass(frozen=True)
class ReportSettings:
    """Tunable knobs for a report run."""
    delimiter: str = DEFAULT_DELIMITER
    day_order: DayOrder = DayOrder.LEXICOGRAPHIC
    skip_blank_lines: bool = False
    encoding: str = 'utf-8'
    decode_errors: str = 'replace'


def _settings_from_mapping(raw: Dict[str, Any]) -> ReportSettings:
    known = {f.name for f in fields(ReportSettings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

    values: Dict[str, Any] = {}

    if 'delimiter' in raw:
        delimiter = raw['delimiter']
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise ConfigError(f"delimiter must be a single character, got {delimiter!r}")
        values['delimiter'] = delimiter

    if 'day_order' in raw:
        try:
            values['day_order'] = DayOrder(str(raw['day_order']).lower())
        except ValueError:
            allowed = '|'.join(DayOrder.all_values())
            raise ConfigError(f"day_order must be one of {allowed}, got {raw['day_order']!r}")

    if 'skip_blank_lines' in raw:
        if not isinstance(raw['skip_blank_lines'], bool):
            raise ConfigError("skip_blank_lines must be true or false")
        values['skip_blank_lines'] = raw['skip_blank_lines']

    if 'encoding' in raw:
        if not isinstance(raw['encoding'], str) or not raw['encoding']:
            raise ConfigError("encoding must be a non-empty string")
        try:
            codecs.lookup(raw['encoding'])
        except LookupError:
            raise ConfigError(f"Unknown encoding: {raw['encoding']!r}")
        values['encoding'] = raw['encoding']

    if 'decode_errors' in raw:
        try:
            codecs.lookup_error(str(raw['decode_errors']))
        except LookupError:
            raise ConfigError(f"Unknown decode_errors handler: {raw['decode_errors']!r}")
        values['decode_errors'] = str(raw['decode_errors'])

    return ReportSettings(**values)


def load_settings(cfg_path: Optional[Path] = None) -> ReportSettings:
    """Load report settings from a YAML file; defaults when no path is given."""
    if cfg_path is None:
        return ReportSettings()

    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Failed to read settings file {cfg_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in settings file {cfg_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Settings file {cfg_path} must contain a mapping")

    return _settings_from_mapping(raw)
