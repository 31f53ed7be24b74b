"""Pytest configuration and shared fixtures.

Provides a fake probe gateway, provider payloads and sample records.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generator, Iterable, Iterator

import pytest

# Add parent directory to path so imports work
# This allows: from enums import ... to find /project/enums.py
sys.path.insert(0, str(Path(__file__).parent.parent))

import config
from enums import AnonymizationCategory
from logging_config import setup_logging
from models import AddressRecord, ClassificationResult, ThroughputSample


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> Generator[None, None, None]:
    """Configure logging for all tests.

    Runs once before any tests (scope="session", autouse=True).
    """
    setup_logging(verbose=False)
    yield


class FakeStream:
    """Stand-in for a streamed requests.Response."""

    def __init__(self, chunks: Iterable[bytes], error: Exception | None = None) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.consumed = 0
        self.closed = False

    def iter_content(self, chunk_size: int = 1) -> Generator[bytes, None, None]:
        for chunk in self.chunks:
            self.consumed += 1
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self) -> None:
        self.closed = True


class FakeGateway:
    """ProbeGateway double answering from canned responses.

    json_responses maps URL to a payload, None (failure) or an exception
    to raise. Unknown URLs fail. Every call is recorded in calls.
    """

    def __init__(
        self,
        json_responses: dict[str, Any] | None = None,
        head_ok: bool = True,
        stream: FakeStream | None = None,
        post_ok: bool = True,
    ) -> None:
        self.json_responses = json_responses or {}
        self.head_ok = head_ok
        self.stream = stream
        self.post_ok = post_ok
        self.calls: list[tuple[str, str]] = []
        self.posted: list[bytes] = []
        self.read_timeouts: list[float | None] = []
        self.closed = False

    def get_json(self, url: str) -> dict[str, Any] | None:
        self.calls.append(("GET", url))
        value = self.json_responses.get(url)
        if isinstance(value, Exception):
            raise value
        return value

    def head(self, url: str) -> bool:
        self.calls.append(("HEAD", url))
        return self.head_ok

    def open_stream(self, url: str, read_timeout: float | None = None) -> FakeStream | None:
        self.calls.append(("STREAM", url))
        self.read_timeouts.append(read_timeout)
        return self.stream

    def iter_available(self, response: FakeStream, chunk_size: int) -> Iterator[bytes]:
        return response.iter_content(chunk_size)

    def post(self, url: str, data: bytes, timeout: float | None = None) -> bool:
        self.calls.append(("POST", url))
        self.posted.append(data)
        return self.post_ok

    def close(self) -> None:
        self.closed = True

    def count(self, url: str) -> int:
        """Number of requests made to url."""
        return sum(1 for _, called in self.calls if called == url)


def make_clock(*readings: float):
    """Build a clock returning the given readings in order."""
    values = iter(readings)
    return lambda: next(values)


@pytest.fixture
def primary_payload() -> dict[str, Any]:
    """ipwho.is response for a residential connection."""
    return {
        "ip": "203.0.113.7",
        "success": True,
        "type": "IPv4",
        "country": "Germany",
        "country_code": "DE",
        "region": "Berlin",
        "city": "Berlin",
        "latitude": 52.520008,
        "longitude": 13.404954,
        "connection": {
            "asn": 3320,
            "org": "Deutsche Telekom AG",
            "isp": "Deutsche Telekom AG",
            "domain": "telekom.de",
        },
        "security": {
            "anonymous": False,
            "proxy": False,
            "vpn": False,
            "tor": False,
            "hosting": False,
        },
    }


@pytest.fixture
def fallback_payload() -> dict[str, Any]:
    """ipapi.co response."""
    return {
        "ip": "203.0.113.7",
        "city": "Hamburg",
        "region": "Hamburg",
        "country": "DE",
        "country_name": "Germany",
        "latitude": 53.5507,
        "longitude": 9.993,
        "org": "AS3320 Deutsche Telekom AG",
    }


@pytest.fixture
def healthy_responses(primary_payload: dict[str, Any]) -> dict[str, Any]:
    """Canned responses for a fully successful identity lookup."""
    return {
        config.IPV4_LOOKUP_URL: {"ip": "203.0.113.7"},
        config.IPV6_LOOKUP_URL: {"ip": "2001:db8::7"},
        config.GEO_PRIMARY_URL: primary_payload,
    }


@pytest.fixture
def sample_address() -> AddressRecord:
    """Fully resolved address record."""
    return AddressRecord(
        ipv4="203.0.113.7",
        ipv6="2001:db8::7",
        country="Germany",
        region="Berlin",
        city="Berlin",
        isp="Deutsche Telekom AG",
        latitude=52.520008,
        longitude=13.404954,
        resolved_at=datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_vpn_classification() -> ClassificationResult:
    """Verdict for a VPN exit on a hosting network."""
    return ClassificationResult(
        is_anonymized=True,
        category=AnonymizationCategory.VPN,
        is_hosting=True,
        organization="M247 Europe SRL",
        triggered=frozenset({AnonymizationCategory.VPN, AnonymizationCategory.PROXY}),
    )


@pytest.fixture
def sample_throughput() -> ThroughputSample:
    """Successful measurement."""
    return ThroughputSample(download_mbps=38.15, upload_mbps=7.5, ping_ms=21)
