"""Tests for network/security.py.

Tests signal extraction from provider payloads and lookup failure handling.
"""

import config
from conftest import FakeGateway
from models import UNAVAILABLE
from network.security import extract_signals, fetch_security_signals

LOOKUP_URL = config.SECURITY_LOOKUP_URL.format(ip="203.0.113.7")


class TestExtractSignals:
    """Tests for extract_signals function."""

    def test_clean_residential_payload(self, primary_payload) -> None:
        """Test payload with every flag false."""
        signals = extract_signals(primary_payload)

        assert signals.is_proxy is False
        assert signals.is_vpn is False
        assert signals.is_tor is False
        assert signals.is_relay is False
        assert signals.connection_proxy is False
        assert signals.is_hosting is False
        assert signals.organization == "Deutsche Telekom AG"

    def test_short_flag_names(self) -> None:
        """Test "vpn"/"tor" spellings are read."""
        data = {"security": {"vpn": True, "tor": True}}

        signals = extract_signals(data)

        assert signals.is_vpn is True
        assert signals.is_tor is True

    def test_prefixed_flag_names(self) -> None:
        """Test "is_proxy"/"is_relay" spellings are read."""
        data = {
            "security": {"is_proxy": True, "is_relay": True},
            "connection": {"is_proxy": True, "isp_hosting": True, "org": "Example Hosting"},
        }

        signals = extract_signals(data)

        assert signals.is_proxy is True
        assert signals.is_relay is True
        assert signals.connection_proxy is True
        assert signals.is_hosting is True
        assert signals.organization == "Example Hosting"

    def test_either_spelling_raises_flag(self) -> None:
        """Test a true flag under one spelling is not masked by the other."""
        data = {"security": {"vpn": False, "is_vpn": True}}

        assert extract_signals(data).is_vpn is True

    def test_only_literal_true_counts(self) -> None:
        """Test truthy non-boolean values do not raise flags."""
        data = {"security": {"vpn": "true", "tor": 1, "proxy": "yes"}}

        signals = extract_signals(data)

        assert signals.is_vpn is False
        assert signals.is_tor is False
        assert signals.is_proxy is False

    def test_empty_payload(self) -> None:
        """Test missing objects give an empty bundle."""
        signals = extract_signals({})

        assert signals.is_vpn is False
        assert signals.organization == UNAVAILABLE

    def test_security_not_an_object(self) -> None:
        """Test malformed nested object is ignored."""
        signals = extract_signals({"security": ["vpn"], "connection": "none"})

        assert signals.is_vpn is False
        assert signals.organization == UNAVAILABLE


class TestFetchSecuritySignals:
    """Tests for fetch_security_signals function."""

    def test_successful_lookup(self) -> None:
        """Test lookup for the given address."""
        gateway = FakeGateway({LOOKUP_URL: {"success": True, "security": {"vpn": True}}})

        signals = fetch_security_signals(gateway, "203.0.113.7")

        assert signals is not None
        assert signals.is_vpn is True
        assert gateway.count(LOOKUP_URL) == 1

    def test_provider_failure_returns_none(self) -> None:
        """Test transport failure gives None."""
        gateway = FakeGateway({LOOKUP_URL: None})

        assert fetch_security_signals(gateway, "203.0.113.7") is None

    def test_provider_unsuccessful_returns_none(self, caplog) -> None:
        """Test {"success": false} gives None."""
        gateway = FakeGateway({LOOKUP_URL: {"success": False, "message": "Reserved range"}})

        assert fetch_security_signals(gateway, "203.0.113.7") is None
        assert "Reserved range" in caplog.text

    def test_invalid_address_not_queried(self) -> None:
        """Test sentinel or junk address makes no request."""
        gateway = FakeGateway()

        assert fetch_security_signals(gateway, UNAVAILABLE) is None
        assert gateway.calls == []
