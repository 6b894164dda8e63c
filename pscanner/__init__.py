"""
pscanner - a fast, concurrent TCP connect port scanner.
"""

from .config import ScanConfig, load_config
from .errors import ConfigError, InvalidPort, InvalidRange, PortOutOfRange, PortSpecError, ScanError
from .scanner import PortScanner, ScanReport, collect, dial_port, scan
from .utils import parse_ports

__all__ = [
    "ScanConfig", "load_config",
    "ScanError", "PortSpecError", "InvalidPort", "PortOutOfRange", "InvalidRange", "ConfigError",
    "PortScanner", "ScanReport", "collect", "dial_port", "scan",
    "parse_ports",
]
