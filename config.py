"""Configuration constants for ipcheck.

All configurable values stored here for easy customization.
Single source of truth for all constants and configuration.
"""

from enum import IntEnum, StrEnum

# Address Lookup Services
IPV4_LOOKUP_URL: str = "https://api.ipify.org?format=json"
IPV6_LOOKUP_URL: str = "https://api64.ipify.org?format=json"  # v6-capable, may answer with v4

# Geolocation Providers
GEO_PRIMARY_URL: str = "https://ipwho.is/"
GEO_FALLBACK_URL: str = "https://ipapi.co/json/"

# Security signals come from the primary provider, queried per address
SECURITY_LOOKUP_URL: str = "https://ipwho.is/{ip}"

# Bandwidth Probe Targets
LATENCY_PROBE_URL: str = "https://www.google.com/generate_204"
DOWNLOAD_PROBE_URL: str = "https://speed.cloudflare.com/__down?bytes=10000000"  # 10 MB
UPLOAD_PROBE_URL: str = "https://httpbin.org/post"

# Timeouts
TIMEOUT_SECONDS: int = 10
UPLOAD_TIMEOUT_SECONDS: int = 30
DOWNLOAD_CEILING_SECONDS: float = 5.0  # Wall clock, measured from request start

# Measurement Sizes
UPLOAD_PAYLOAD_BYTES: int = 1024 * 1024  # 1 MiB
DOWNLOAD_CHUNK_BYTES: int = 64 * 1024

# Binary prefix: Mbps here means 2**20 bits per second
BITS_PER_MEGABIT: int = 1024 * 1024

# Sentinel for any numeric measurement that failed
MEASUREMENT_FAILED: int = -1

# One worker each for IPv4, IPv6 and the geolocation chain
RESOLVER_WORKERS: int = 3

# Location Field Candidates
# Ordered key paths probed in each provider payload, first present value wins.
# Nested paths are tuples: ("connection", "isp") reads payload["connection"]["isp"].
LOCATION_FIELD_CANDIDATES: dict[str, tuple[tuple[str, ...], ...]] = {
    "country": (("country_name",), ("country",)),
    "region": (("region",), ("region_name",)),
    "city": (("city",),),
    "isp": (("org",), ("connection", "isp"), ("isp",)),
    "latitude": (("latitude",), ("lat",)),
    "longitude": (("longitude",), ("lon",)),
}

# Security Signal Candidates (ipwho.is payload layout)
# The provider has shipped both "vpn" and "is_vpn" spellings.
SECURITY_SIGNAL_CANDIDATES: dict[str, tuple[tuple[str, ...], ...]] = {
    "is_proxy": (("security", "proxy"), ("security", "is_proxy")),
    "is_vpn": (("security", "vpn"), ("security", "is_vpn")),
    "is_tor": (("security", "tor"), ("security", "is_tor")),
    "is_relay": (("security", "relay"), ("security", "is_relay")),
    "connection_proxy": (("connection", "proxy"), ("connection", "is_proxy")),
    "is_hosting": (("connection", "isp_hosting"), ("connection", "hosting")),
    "organization": (("connection", "org"),),
}


# Exit Codes
class ExitCode(IntEnum):
    """Standard exit codes for ipcheck."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENTS = 4


# ANSI Color Codes
class Color(StrEnum):
    """ANSI color codes used by the report and console log."""

    GREEN = "\033[92m"
    CYAN = "\033[96m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    MAGENTA = "\033[95m"
    RESET = "\033[0m"


# Report label column width
REPORT_LABEL_WIDTH: int = 16

# Tool Metadata
VERSION: str = "1.0.0"
TOOL_NAME: str = "ipcheck"
USER_AGENT: str = f"{TOOL_NAME}/{VERSION}"
