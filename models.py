"""Data models for connection identity, classification and throughput.

All models are frozen dataclasses: each refresh cycle builds new instances
and never mutates the previous ones.
Data markers (Unavailable, -1) indicate missing values, see enums.DataMarker
and config.MEASUREMENT_FAILED.

Architecture:
- AddressRecord: resolved public addresses and location
- SecuritySignalBundle: raw anonymization indicators for one address
- ClassificationResult: verdict derived from a signal bundle
- ThroughputSample: one bandwidth measurement cycle
- FailureNotice: reported when identity resolution fails outright
- CycleResult: everything one refresh produced
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

import config
from enums import AnonymizationCategory, DataMarker

UNAVAILABLE = DataMarker.UNAVAILABLE.value


@dataclass(frozen=True)
class AddressRecord:
    """Resolved network identity for one refresh cycle."""

    ipv4: str  # IPv4 address or "Unavailable"
    ipv6: str  # IPv6 address or "Unavailable"
    country: str
    region: str
    city: str
    isp: str
    latitude: float | None  # None when no provider supplied a finite value
    longitude: float | None
    resolved_at: datetime

    @classmethod
    def create_unavailable(cls, resolved_at: datetime | None = None) -> "AddressRecord":
        """Create record with every field set to the unavailable marker.

        Args:
            resolved_at: Completion time (default: now, UTC)

        Returns:
            AddressRecord carrying no data.
        """
        return cls(
            ipv4=UNAVAILABLE,
            ipv6=UNAVAILABLE,
            country=UNAVAILABLE,
            region=UNAVAILABLE,
            city=UNAVAILABLE,
            isp=UNAVAILABLE,
            latitude=None,
            longitude=None,
            resolved_at=resolved_at or datetime.now(timezone.utc),
        )

    @property
    def has_ipv4(self) -> bool:
        """True if a usable IPv4 address was resolved."""
        return self.ipv4 != UNAVAILABLE

    @property
    def has_ipv6(self) -> bool:
        """True if a usable IPv6 address was resolved."""
        return self.ipv6 != UNAVAILABLE

    @property
    def has_location(self) -> bool:
        """True if any location field carries provider data."""
        text_fields = (self.country, self.region, self.city, self.isp)
        return (
            any(value != UNAVAILABLE for value in text_fields)
            or self.latitude is not None
            or self.longitude is not None
        )


@dataclass(frozen=True)
class SecuritySignalBundle:
    """Anonymization indicators reported for one address.

    Every flag defaults to False so partial provider data is still a
    valid bundle.
    """

    is_proxy: bool = False
    is_vpn: bool = False
    is_tor: bool = False
    is_relay: bool = False
    connection_proxy: bool = False  # Proxy flag from the connection layer
    is_hosting: bool = False
    organization: str = UNAVAILABLE


@dataclass(frozen=True)
class ClassificationResult:
    """Anonymization verdict.

    Invariant: category is NONE if and only if is_anonymized is False.
    triggered lists every category whose flag fired, category is the
    highest of them.
    """

    is_anonymized: bool
    category: AnonymizationCategory
    is_hosting: bool
    organization: str
    triggered: frozenset[AnonymizationCategory] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ThroughputSample:
    """Result of one full bandwidth measurement cycle."""

    download_mbps: float  # Mbps (binary prefix) or -1
    upload_mbps: float  # Mbps (binary prefix) or -1
    ping_ms: int  # Round trip in ms or -1

    @property
    def download_ok(self) -> bool:
        """True if the download phase produced a value."""
        return self.download_mbps != config.MEASUREMENT_FAILED

    @property
    def upload_ok(self) -> bool:
        """True if the upload phase produced a value."""
        return self.upload_mbps != config.MEASUREMENT_FAILED

    @property
    def ping_ok(self) -> bool:
        """True if the latency phase produced a value."""
        return self.ping_ms != config.MEASUREMENT_FAILED


@dataclass(frozen=True)
class FailureNotice:
    """Reported to the caller when identity resolution fails outright."""

    message: str
    detail: str


@dataclass(frozen=True)
class CycleResult:
    """Everything a single refresh cycle produced.

    classification and throughput are None when skipped or not available.
    """

    address: AddressRecord
    classification: ClassificationResult | None = None
    throughput: ThroughputSample | None = None
    failure: FailureNotice | None = None
