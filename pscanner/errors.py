"""
Error taxonomy for pscanner.

Port specification and configuration problems are raised before any
network activity starts. Dial failures are never errors: a port that does
not accept a connection is simply left out of the results.
"""


class ScanError(Exception):
    """Base class for every error raised by pscanner."""


class PortSpecError(ScanError, ValueError):
    """A port specification could not be resolved."""

    def __init__(self, message: str, token: str = ""):
        super().__init__(message)
        self.token = token


class InvalidPort(PortSpecError):
    """A token is not a valid integer."""


class PortOutOfRange(PortSpecError):
    """A single port lies outside 1-65535."""


class InvalidRange(PortSpecError):
    """A range has out-of-bounds or inverted endpoints."""


class ConfigError(ScanError, ValueError):
    """Scan parameters (host, workers, timeout, ports) failed validation."""
