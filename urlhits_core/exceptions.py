"""Custom exceptions for urlhits operations."""


class UrlHitsError(Exception):
    """Base exception for all urlhits operations."""
    pass


class LogReadError(UrlHitsError):
    """Raised when the input log file cannot be opened or decoded."""
    pass


class ConfigError(UrlHitsError):
    """Raised when a settings file is unreadable or holds invalid values."""
    pass
