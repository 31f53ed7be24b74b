"""Tests for config.py.

Tests constants that measurement results depend on.
"""

from urllib.parse import urlparse

import config
from config import ExitCode


class TestExitCode:
    """Tests for ExitCode enum."""

    def test_exit_code_values(self):
        """Test exit code values."""
        assert ExitCode.SUCCESS == 0
        assert ExitCode.GENERAL_ERROR == 1
        assert ExitCode.INVALID_ARGUMENTS == 4

    def test_exit_code_is_int(self):
        """Test exit codes are usable with sys.exit."""
        assert isinstance(ExitCode.SUCCESS, int)


class TestMeasurementConstants:
    """Tests for bandwidth constants."""

    def test_binary_megabit(self):
        """Test Mbps uses 1024 * 1024."""
        assert config.BITS_PER_MEGABIT == 1_048_576

    def test_upload_payload_one_mebibyte(self):
        """Test upload size."""
        assert config.UPLOAD_PAYLOAD_BYTES == 1_048_576

    def test_download_ceiling(self):
        """Test download ceiling is 5 seconds."""
        assert config.DOWNLOAD_CEILING_SECONDS == 5.0

    def test_failure_sentinel(self):
        """Test sentinel is -1."""
        assert config.MEASUREMENT_FAILED == -1

    def test_every_request_has_timeout(self):
        """Test timeouts are positive."""
        assert config.TIMEOUT_SECONDS > 0
        assert config.UPLOAD_TIMEOUT_SECONDS > 0


class TestEndpoints:
    """Tests for endpoint URLs."""

    def test_all_https(self):
        """Test every endpoint uses HTTPS."""
        urls = [
            config.IPV4_LOOKUP_URL,
            config.IPV6_LOOKUP_URL,
            config.GEO_PRIMARY_URL,
            config.GEO_FALLBACK_URL,
            config.SECURITY_LOOKUP_URL.format(ip="203.0.113.7"),
            config.LATENCY_PROBE_URL,
            config.DOWNLOAD_PROBE_URL,
            config.UPLOAD_PROBE_URL,
        ]
        for url in urls:
            assert urlparse(url).scheme == "https"

    def test_security_url_takes_address(self):
        """Test address is placed in the path."""
        assert config.SECURITY_LOOKUP_URL.format(ip="2001:db8::7").endswith("/2001:db8::7")


class TestFieldCandidates:
    """Tests for field candidate tables."""

    def test_location_fields_covered(self):
        """Test every location field has candidates."""
        assert set(config.LOCATION_FIELD_CANDIDATES) == {
            "country",
            "region",
            "city",
            "isp",
            "latitude",
            "longitude",
        }

    def test_isp_priority(self):
        """Test org > connection.isp > isp."""
        assert config.LOCATION_FIELD_CANDIDATES["isp"] == (
            ("org",),
            ("connection", "isp"),
            ("isp",),
        )

    def test_paths_are_tuples_of_strings(self):
        """Test every candidate is a non-empty key path."""
        tables = (config.LOCATION_FIELD_CANDIDATES, config.SECURITY_SIGNAL_CANDIDATES)
        for table in tables:
            for paths in table.values():
                for path in paths:
                    assert path
                    assert all(isinstance(key, str) for key in path)
