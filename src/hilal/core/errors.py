class HilalError(Exception):
    """Base error."""

class DomainRangeError(HilalError, ValueError):
    """Raised when a month or day-count falls outside the baseline table."""

class InvariantError(HilalError):
    """Raised when month starts break the 29/30-day law or the store ordering."""

class SnapshotDecodeError(HilalError, ValueError):
    """Raised when a serialized adjustment snapshot cannot be decoded."""

class ConfigError(HilalError, ValueError):
    """Raised for invalid settings."""
