"""
Unit tests for port specification parsing and scan configuration.
Run with: pytest tests/ -v
"""
import pytest

from pscanner.config import ScanConfig, load_config
from pscanner.errors import (
    ConfigError, InvalidPort, InvalidRange, PortOutOfRange, PortSpecError, ScanError
)
from pscanner.utils import parse_ports


class TestPortParser:
    """Test port specification resolution"""

    def test_parse_single_port(self):
        """Test single port"""
        assert parse_ports("80") == [80]

    def test_parse_multiple_ports_sorted(self):
        """Test comma-separated ports come back ascending"""
        assert parse_ports("443,22,80") == [22, 80, 443]

    def test_order_independent(self):
        """Test token order does not change the result"""
        assert parse_ports("443,80") == parse_ports("80,443") == [80, 443]

    def test_idempotent(self):
        """Test resolving a resolved set again yields the same set"""
        first = parse_ports("1000-1003,22")
        again = parse_ports(",".join(str(p) for p in first))
        assert first == again

    def test_parse_range(self):
        """Test inclusive port range"""
        assert parse_ports("20-25") == [20, 21, 22, 23, 24, 25]

    def test_overlap_collapses(self):
        """Test a port named by a literal and a range appears once"""
        assert parse_ports("20-22,21") == [20, 21, 22]
        assert parse_ports("1-5,3-8,8") == list(range(1, 9))

    def test_whitespace_and_blank_tokens(self):
        """Test tokens are trimmed and empty tokens skipped"""
        assert parse_ports(" 22 , ,80, 100 - 102,") == [22, 80, 100, 101, 102]

    def test_single_port_range(self):
        """Test a range with equal bounds"""
        assert parse_ports("7-7") == [7]

    def test_full_range(self):
        """Test the widest valid range"""
        ports = parse_ports("1-65535")
        assert len(ports) == 65535
        assert ports[0] == 1
        assert ports[-1] == 65535

    @pytest.mark.parametrize("spec", ["", "   ", ",", " , ,"])
    def test_empty_spec_is_not_an_error(self, spec):
        """Test blank input resolves to nothing"""
        assert parse_ports(spec) == []

    @pytest.mark.parametrize("spec", ["0", "65536", "70000"])
    def test_port_out_of_range(self, spec):
        """Test single ports outside 1-65535"""
        with pytest.raises(PortOutOfRange):
            parse_ports(spec)

    @pytest.mark.parametrize("spec", ["5-3", "0-10", "1-65536", "65535-65536"])
    def test_invalid_range(self, spec):
        """Test inverted and out-of-bounds ranges"""
        with pytest.raises(InvalidRange):
            parse_ports(spec)

    @pytest.mark.parametrize("spec", [
        "abc", "10-", "-10", "80,http", "1-2-3", "a-5",
        "1_000", "8_0-9_0", "\u0668\u0660", "\u0668\u0660-90", "0x50", "8.0",
    ])
    def test_invalid_port(self, spec):
        """Test non-numeric tokens and empty range sides"""
        with pytest.raises(InvalidPort):
            parse_ports(spec)

    @pytest.mark.parametrize("spec", ["99999999999999999999", "1-99999999999999999999"])
    def test_overlong_number_is_invalid_port(self, spec):
        """Test numbers too large to be a port token at all"""
        with pytest.raises(InvalidPort):
            parse_ports(spec)

    def test_signed_single_port(self):
        """Test an explicit plus sign is accepted like any decimal"""
        assert parse_ports("+80") == [80]

    def test_error_carries_token(self):
        """Test the offending token is reported"""
        with pytest.raises(InvalidRange) as exc:
            parse_ports("22, 90-80 ,443")
        assert exc.value.token == "90-80"

    def test_errors_share_base_classes(self):
        """Test resolver errors are ValueErrors and ScanErrors"""
        for error in (InvalidPort, PortOutOfRange, InvalidRange):
            assert issubclass(error, PortSpecError)
            assert issubclass(error, ScanError)
            assert issubclass(error, ValueError)


class TestScanConfig:
    """Test Pydantic configuration validation"""

    def test_valid_config(self):
        """Test valid configuration and defaults"""
        config = ScanConfig(host="192.168.1.1", ports=[443, 80])
        assert config.host == "192.168.1.1"
        assert config.ports == [80, 443]
        assert config.workers == 100
        assert config.timeout_ms == 500
        assert config.timeout == 0.5

    def test_worker_clamping(self):
        """Test effective workers never exceed the port count"""
        config = ScanConfig(host="h", ports=[1, 2, 3], workers=50)
        assert config.effective_workers == 3
        config = ScanConfig(host="h", ports=list(range(1, 201)), workers=50)
        assert config.effective_workers == 50

    @pytest.mark.parametrize("workers", [0, -1, 10001])
    def test_invalid_workers(self, workers):
        """Test worker count bounds"""
        with pytest.raises(ConfigError):
            load_config(host="h", ports=[80], workers=workers)

    def test_worker_bounds_accepted(self):
        """Test the extreme valid worker counts"""
        assert load_config(host="h", ports=[80], workers=1).workers == 1
        assert load_config(host="h", ports=[80], workers=10000).workers == 10000

    @pytest.mark.parametrize("host", ["", "   "])
    def test_missing_host(self, host):
        """Test host is required"""
        with pytest.raises(ConfigError):
            load_config(host=host, ports=[80])

    def test_empty_ports(self):
        """Test the engine is never configured with nothing to scan"""
        with pytest.raises(ConfigError):
            load_config(host="h", ports=[])

    def test_invalid_timeout(self):
        """Test timeout must not be negative"""
        with pytest.raises(ConfigError):
            load_config(host="h", ports=[80], timeout_ms=-1)

    def test_zero_timeout_means_no_deadline(self):
        """Test a zero timeout disables the dial deadline"""
        config = load_config(host="h", ports=[80], timeout_ms=0)
        assert config.timeout_ms == 0
        assert config.timeout is None

    def test_config_error_names_field(self):
        """Test the message points at the failing field"""
        with pytest.raises(ConfigError, match="workers"):
            load_config(host="h", ports=[80], workers=0)
